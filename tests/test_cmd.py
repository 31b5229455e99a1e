"""Tests for the command-line tool."""

import pytest

from py_davclient.cmd import client as cli
from py_davclient.session import Session


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["HOST", "USER", "PASSWORD", "TOKEN", "TIMEOUT", "DEBUG"]:
        monkeypatch.delenv(f"DAVCLIENT_{name}", raising=False)


@pytest.fixture
def fake_session(monkeypatch, transport):
    """Route every CLI session through the in-memory server."""
    original = Session.initialize.__func__

    def initialize(cls, config=None, **options):
        return original(cls, config, transport=transport, **options)

    monkeypatch.setattr(Session, "initialize", classmethod(initialize))


def test_config_from_args_overrides_env(monkeypatch):
    monkeypatch.setenv("DAVCLIENT_HOST", "http://env.test")
    monkeypatch.setenv("DAVCLIENT_TOKEN", "envtoken")
    args = cli.build_parser().parse_args(["--user", "u", "--password", "p", "head", "/a"])

    config = cli.config_from_args(args)

    assert config.host == "http://env.test"
    assert config.token is None
    assert (config.user, config.password) == ("u", "p")
    config.validate()


def test_missing_host_is_usage_error(capsys):
    assert cli.main(["--token", "t", "head", "/a"]) == 2
    assert "host is required" in capsys.readouterr().err


def test_get_writes_body(server, fake_session, host, token, tmp_path):
    server.resources["/a.txt"] = b"payload"
    out = tmp_path / "out.txt"

    code = cli.main(["--host", host, "--token", token, "get", "/a.txt", "-o", str(out)])

    assert code == 0
    assert out.read_bytes() == b"payload"


def test_head_missing_exits_nonzero(fake_session, host, token, capsys):
    code = cli.main(["--host", host, "--token", token, "head", "/missing"])

    assert code == 1
    assert capsys.readouterr().out.strip() == "404 Not Found"


def test_put_dir(server, fake_session, host, token, tmp_path):
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a.txt").write_bytes(b"A")

    code = cli.main(["--host", host, "--token", token, "put-dir", "--mkcol", "/r", str(root)])

    assert code == 0
    assert server.requests == [("MKCOL", "/r/proj/"), ("PUT", "/r/proj/a.txt")]


def test_move_missing_source_reports_error(fake_session, host, token, capsys):
    code = cli.main(["--host", host, "--token", token, "move", "/a.txt", "/b.txt"])

    assert code == 1
    assert "expected 200, got 404" in capsys.readouterr().err


def test_user_flag_keeps_password_from_env(monkeypatch):
    monkeypatch.setenv("DAVCLIENT_HOST", "http://env.test")
    monkeypatch.setenv("DAVCLIENT_PASSWORD", "pw")
    args = cli.build_parser().parse_args(["--user", "me", "get", "/x"])

    config = cli.config_from_args(args)

    assert (config.user, config.password) == ("me", "pw")
    config.validate()


def test_token_flag_keeps_env_host_and_drops_env_login(monkeypatch):
    monkeypatch.setenv("DAVCLIENT_HOST", "http://env.test")
    monkeypatch.setenv("DAVCLIENT_USER", "u")
    monkeypatch.setenv("DAVCLIENT_PASSWORD", "p")
    args = cli.build_parser().parse_args(["--token", "t", "get", "/x"])

    config = cli.config_from_args(args)

    assert (config.token, config.user, config.password) == ("t", None, None)


def test_token_with_user_is_usage_error(capsys):
    code = cli.main(["--host", "http://h.test", "--token", "t", "--user", "u", "head", "/a"])

    assert code == 2
    assert "not both" in capsys.readouterr().err
