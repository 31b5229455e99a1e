"""WebDAV client command-line tool."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import replace

from py_davclient.config import ClientConfig
from py_davclient.internal import DAVClientError
from py_davclient.session import Session
from py_davclient.webdav import Outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-davclient",
        description="WebDAV client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Download a file
  py-davclient --host https://dav.example.com --user me --password secret get /notes.txt

  # Mirror a local directory below /backup, creating collections first
  py-davclient put-dir --mkcol /backup ./project

  # Rename a resource
  py-davclient move /old.txt /new.txt

Options not given on the command line are read from DAVCLIENT_HOST,
DAVCLIENT_USER, DAVCLIENT_PASSWORD, DAVCLIENT_TOKEN and DAVCLIENT_TIMEOUT.
        """,
    )
    parser.add_argument("--host", help="server base URL")
    parser.add_argument("--user", help="user name for Basic authentication")
    parser.add_argument("--password", help="password for Basic authentication")
    parser.add_argument("--token", help="pre-encoded Basic authentication token")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument(
        "--no-mkcol",
        action="store_true",
        help="emulate MKCOL with PUT and DELETE",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging (logs request/response headers and bodies)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="download a resource")
    get.add_argument("uri")
    get.add_argument("-o", "--output", help="write the body to this file instead of stdout")

    put = commands.add_parser("put", help="upload data read from a file or stdin")
    put.add_argument("uri")
    put.add_argument("source", nargs="?", default="-", help="file to read, - for stdin")

    put_file = commands.add_parser("put-file", help="stream a local file")
    put_file.add_argument("uri")
    put_file.add_argument("path")

    put_dir = commands.add_parser("put-dir", help="recursively upload a local directory")
    put_dir.add_argument("uri")
    put_dir.add_argument("path")
    put_dir.add_argument("--mkcol", action="store_true", help="create collections before uploading")
    put_dir.add_argument("--include-hidden", action="store_true", help="upload dot-files too")

    for name, text in [
        ("delete", "delete a resource"),
        ("head", "show the status of a resource"),
        ("mkcol", "create a collection"),
    ]:
        cmd = commands.add_parser(name, help=text)
        cmd.add_argument("uri")

    move = commands.add_parser("move", help="move a resource with GET, PUT and DELETE")
    move.add_argument("source")
    move.add_argument("destination")

    return parser


def config_from_args(args: argparse.Namespace) -> ClientConfig:
    """Overlay command-line options on the environment config.

    Raises:
        ValueError: If --token is combined with --user or --password
    """
    if args.token and (args.user or args.password):
        raise ValueError("davclient: give either --token or --user/--password, not both")

    config = ClientConfig.from_env()
    if args.host:
        config.host = args.host
    if args.token:
        config = replace(config, token=args.token, user=None, password=None)
    elif args.user or args.password:
        config = replace(
            config,
            user=args.user or config.user,
            password=args.password or config.password,
            token=None,
        )
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.no_mkcol:
        config.supports_mkcol = False
    if args.debug:
        config.debug = True
    return config


async def run(args: argparse.Namespace, config: ClientConfig) -> Outcome | None:
    """Execute one command against a fresh session."""
    async with Session.initialize(config) as session:
        if args.command == "get":
            return await session.get(args.uri)
        if args.command == "put":
            if args.source == "-":
                data = sys.stdin.buffer.read()
            else:
                with open(args.source, "rb") as f:
                    data = f.read()
            return await session.put(args.uri, data)
        if args.command == "put-file":
            return await session.put_file(args.uri, args.path)
        if args.command == "put-dir":
            await session.put_directory(
                args.uri,
                args.path,
                create_collections=args.mkcol,
                include_hidden=args.include_hidden,
            )
            return None
        if args.command == "delete":
            return await session.delete(args.uri)
        if args.command == "head":
            return await session.head(args.uri)
        if args.command == "mkcol":
            return await session.mkcol(args.uri)
        if args.command == "move":
            return await session.move(args.source, args.destination)
    raise ValueError(f"unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the WebDAV client."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if config.debug:
        from py_davclient.debug import setup_debug_logging
        setup_debug_logging()

    try:
        outcome = asyncio.run(run(args, config))
    except DAVClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if outcome is None:
        print("OK")
        return 0

    if args.command == "get" and outcome.ok:
        if args.output:
            with open(args.output, "wb") as f:
                f.write(outcome.body)
        else:
            sys.stdout.buffer.write(outcome.body)
            sys.stdout.flush()
        print(f"{outcome.status_code} {outcome.status_text}", file=sys.stderr)
    else:
        print(f"{outcome.status_code} {outcome.status_text}")

    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
