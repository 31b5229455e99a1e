"""Tests for the local filesystem adapter."""

import os

import pytest

from py_davclient.fs_local import LocalFileSystem
from py_davclient.internal import FileNotFound
from py_davclient.webdav import FileKind


def test_stat_regular_file(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"hello")

    info = LocalFileSystem().stat(path)

    assert info.exists
    assert info.kind is FileKind.REGULAR
    assert info.size == 5
    assert info.is_file and not info.is_dir


def test_stat_directory(tmp_path):
    info = LocalFileSystem().stat(tmp_path)

    assert info.is_dir
    assert info.size == 0


def test_stat_missing(tmp_path):
    info = LocalFileSystem().stat(tmp_path / "missing")

    assert not info.exists
    assert info.kind is None


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs mkfifo")
def test_stat_fifo_is_other(tmp_path):
    path = tmp_path / "pipe"
    os.mkfifo(path)

    assert LocalFileSystem().stat(path).kind is FileKind.OTHER


def test_list_entries_sorted_and_skips_hidden(tmp_path):
    for name in ["b.txt", "a.txt", ".hidden"]:
        (tmp_path / name).write_text(name)
    (tmp_path / "sub").mkdir()

    fs = LocalFileSystem()

    assert [p.name for p in fs.list_entries(tmp_path)] == ["a.txt", "b.txt", "sub"]
    assert [p.name for p in fs.list_entries(tmp_path, include_hidden=True)] == [
        ".hidden",
        "a.txt",
        "b.txt",
        "sub",
    ]


@pytest.mark.asyncio
async def test_open_stream_yields_chunks(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"0123456789")

    chunks = [chunk async for chunk in LocalFileSystem(chunk_size=4).open_stream(path)]

    assert chunks == [b"0123", b"4567", b"89"]


def test_invalid_chunk_size():
    with pytest.raises(ValueError):
        LocalFileSystem(chunk_size=0)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
def test_stat_symlink_loop_reported_missing(tmp_path):
    (tmp_path / "a").symlink_to(tmp_path / "b")
    (tmp_path / "b").symlink_to(tmp_path / "a")

    assert not LocalFileSystem().stat(tmp_path / "a").exists


def test_stat_readable(tmp_path, monkeypatch):
    path = tmp_path / "a.txt"
    path.write_bytes(b"a")

    assert LocalFileSystem().stat(path).readable

    monkeypatch.setattr(os, "access", lambda p, mode: False)
    assert not LocalFileSystem().stat(path).readable


def test_list_entries_missing_directory(tmp_path):
    with pytest.raises(FileNotFound):
        LocalFileSystem().list_entries(tmp_path / "missing")


@pytest.mark.asyncio
async def test_open_stream_missing_file(tmp_path):
    with pytest.raises(FileNotFound):
        async for _ in LocalFileSystem().open_stream(tmp_path / "missing"):
            pass
