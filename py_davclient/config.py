"""Configuration for the WebDAV client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

ENV_PREFIX = "DAVCLIENT_"


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ClientConfig:
    """Connection settings for a WebDAV session.

    Exactly one credential form is expected: a pre-encoded ``token``, or a
    ``user`` and ``password`` pair that is encoded into one.
    """

    host: str = ""
    user: str | None = None
    password: str | None = None
    token: str | None = None

    # Request timeout in seconds, None keeps the transport default
    timeout: float | None = None
    supports_mkcol: bool = True
    debug: bool = False

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> ClientConfig:
        """Build a config from a mapping of option names.

        Raises:
            ValueError: If the mapping contains unknown options
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"unknown configuration options: {', '.join(sorted(unknown))}")
        return cls(**dict(mapping))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config from DAVCLIENT_* environment variables."""
        env = os.environ if environ is None else environ
        timeout = env.get(f"{ENV_PREFIX}TIMEOUT")
        return cls(
            host=env.get(f"{ENV_PREFIX}HOST", ""),
            user=env.get(f"{ENV_PREFIX}USER"),
            password=env.get(f"{ENV_PREFIX}PASSWORD"),
            token=env.get(f"{ENV_PREFIX}TOKEN"),
            timeout=float(timeout) if timeout else None,
            debug=_env_flag(env.get(f"{ENV_PREFIX}DEBUG")),
        )

    def validate(self) -> None:
        """Check the host and credential form.

        Raises:
            ValueError: If the host is missing or not exactly one credential form is set
        """
        if not self.host:
            raise ValueError("davclient: host is required")

        has_token = self.token is not None
        has_login = self.user is not None or self.password is not None
        if has_token and has_login:
            raise ValueError("davclient: give either token or user/password, not both")
        if not has_token:
            if self.user is None or self.password is None:
                raise ValueError("davclient: user and password are required when no token is given")
