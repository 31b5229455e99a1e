#!/usr/bin/env python3
"""Mirror a local directory onto a WebDAV server and check the result.

Usage:
    DAVCLIENT_HOST=https://dav.example.com DAVCLIENT_USER=me DAVCLIENT_PASSWORD=secret \
        python examples/mirror_directory.py ./project /backup
"""

import asyncio
import sys

from py_davclient import ClientConfig, Session
from py_davclient.debug import setup_debug_logging


async def main(local_dir: str, remote_dir: str) -> None:
    config = ClientConfig.from_env()
    if config.debug:
        setup_debug_logging()

    async with Session.initialize(config) as session:
        await session.put_directory(remote_dir, local_dir, create_collections=True)
        print(f"Uploaded {local_dir} to {config.host}{remote_dir}")

        checked = await session.head(remote_dir)
        print(f"HEAD {remote_dir}: {checked.status_code} {checked.status_text}")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
