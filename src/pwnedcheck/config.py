"""
Runtime configuration for pwnedcheck.

A single CheckerConfig is built at startup (from the environment, then
overridden by CLI options) and handed to everything that needs it.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pwnedcheck import __version__
from pwnedcheck.exceptions import ConfigurationError

DEFAULT_API_BASE = "https://api.pwnedpasswords.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"pwnedcheck/{__version__}"


class RunMode(str, Enum):
    """What the command line asked for."""

    CHECK_PASSWORD = "check_password"
    CHECK_DIGEST = "check_digest"
    BUILD_HASH_FILE = "build_hash_file"
    CHECK_HASH_FILE = "check_hash_file"


@dataclass
class CheckerConfig:
    """Configuration for range queries and the selected run mode."""

    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT  # seconds, per request
    user_agent: str = DEFAULT_USER_AGENT

    mode: RunMode = RunMode.CHECK_PASSWORD
    # Hash file path for the file modes, digest for CHECK_DIGEST
    target: str | Path | None = None

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Load configuration from environment variables.

        Values are parsed but not validated; call check() once any
        command line overrides have been applied.
        """
        timeout_str = os.environ.get("PWNEDCHECK_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"PWNEDCHECK_TIMEOUT must be a number of seconds, got {timeout_str!r}"
                ) from None

        config = cls(
            api_base=os.environ.get("PWNEDCHECK_API_URL", DEFAULT_API_BASE),
            timeout=timeout,
            user_agent=os.environ.get("PWNEDCHECK_USER_AGENT", DEFAULT_USER_AGENT),
        )
        return config

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if not self.api_base.startswith(("http://", "https://")):
            errors.append(f"API URL must be http(s): {self.api_base}")
        if self.timeout <= 0:
            errors.append("Timeout must be greater than zero")

        if self.mode in (RunMode.BUILD_HASH_FILE, RunMode.CHECK_HASH_FILE, RunMode.CHECK_DIGEST):
            if not self.target:
                errors.append(f"{self.mode.value} requires a target")

        return errors

    def check(self) -> None:
        """Raise ConfigurationError if validate() reports anything."""
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

    @property
    def range_url(self) -> str:
        """Base URL of the range endpoint, without the prefix."""
        return f"{self.api_base.rstrip('/')}/range"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "api_base": self.api_base,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "mode": self.mode.value,
            # A digest target is never echoed in full
            "target": str(self.target) if self.mode != RunMode.CHECK_DIGEST else None,
        }
