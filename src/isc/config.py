"""Configuration management for isc."""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from isc.checksum import Algorithm


def default_thread_count() -> int:
    """Number of available hardware execution units, at least one."""
    return os.cpu_count() or 1


class SyncConfig(BaseSettings):
    """Runtime settings for a selective copy run.

    Every field can be set through an ``ISC_`` prefixed environment variable or
    a ``.env`` file; command line options take precedence over both.
    """

    thread_count: int = Field(
        default_factory=default_thread_count,
        description="Worker threads for digesting and maximum concurrent copies",
    )
    algorithm: Algorithm = Field(
        default=Algorithm.SHA2_256,
        description="Digest algorithm used to compare file contents",
    )
    log_level: str = Field(default="WARNING", description="Log level for stderr output")
    log_file: Optional[Path] = Field(default=None, description="Optional log file")

    model_config = SettingsConfigDict(
        env_prefix="ISC_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("thread_count")
    @classmethod
    def ensure_positive(cls, v: int) -> int:
        """A worker pool needs at least one worker."""
        if v < 1:
            raise ValueError("thread_count must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()
