"""
Runtime settings.

Values come from (lowest to highest priority):
- defaults below
- WEEKENDPLANNER_* environment variables
- CLI flags (applied in cli.py via Settings.override)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "WEEKENDPLANNER_"

# Login pair accepted by the restaurant site.
DEFAULT_USERNAME = "zeke"
DEFAULT_PASSWORD = "coys"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def as_payload(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class Settings:
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    timeout: Optional[float] = DEFAULT_TIMEOUT
    log_level: str = "WARNING"

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.username, self.password)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from WEEKENDPLANNER_* variables.

        An unparsable timeout raises ValueError.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        timeout_raw = env.get(ENV_PREFIX + "TIMEOUT", "").strip()
        timeout = float(timeout_raw) if timeout_raw else defaults.timeout

        return cls(
            username=env.get(ENV_PREFIX + "USERNAME", defaults.username),
            password=env.get(ENV_PREFIX + "PASSWORD", defaults.password),
            timeout=timeout,
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).strip().upper(),
        )

    def override(self, **changes: object) -> "Settings":
        """
        Return a copy with every non-None value in changes applied.
        """
        given = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **given)
