"""Central configuration for the DBML to DDL compiler."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


@dataclass
class DDLConfig:
    """Configuration for the compiler.

    Reads from environment variables with DBML_DDL_ prefix, or accepts
    explicit values.
    """

    # Raise on malformed input instead of recording warnings
    strict: bool = False

    # Root logger level used by the command line entry point
    log_level: str = "WARNING"

    # File encoding for CLI input and output
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> DDLConfig:
        """Load configuration from environment variables."""
        return cls(
            strict=_env_flag("DBML_DDL_STRICT"),
            log_level=os.getenv("DBML_DDL_LOG_LEVEL", "WARNING").upper(),
            encoding=os.getenv("DBML_DDL_ENCODING", "utf-8"),
        )


_config: Optional[DDLConfig] = None


def get_config() -> DDLConfig:
    """Get or create the singleton configuration."""
    global _config
    if _config is None:
        _config = DDLConfig.from_env()
    return _config


def set_config(config: Optional[DDLConfig]) -> None:
    """Override the global configuration. ``None`` resets to the environment."""
    global _config
    _config = config
