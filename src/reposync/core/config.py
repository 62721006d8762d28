"""
reposync configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path.home() / ".reposync" / "config.json"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_enabled: bool = False
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: Path.home() / ".reposync" / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class TransportConfig(BaseModel):
    """External programs used to reach the remote and the ignore rules."""

    ssh_command: list[str] = Field(default_factory=lambda: ["ssh"])
    sftp_command: list[str] = Field(default_factory=lambda: ["sftp"])
    git_command: list[str] = Field(default_factory=lambda: ["git"])
    metadata_dir: str = ".git"
    command_timeout_seconds: int | None = Field(default=None, ge=1)

    @field_validator("ssh_command", "sftp_command", "git_command")
    @classmethod
    def non_empty_command(cls, v: list[str]) -> list[str]:
        if not v or not v[0]:
            raise ValueError("command must name an executable")
        return v

    @field_validator("metadata_dir")
    @classmethod
    def plain_directory_name(cls, v: str) -> str:
        v = v.strip("/")
        if not v or "/" in v:
            raise ValueError("metadata_dir must be a single directory name")
        return v


class ReposyncConfig(BaseModel):
    """Main reposync configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> ReposyncConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)


def get_default_config() -> ReposyncConfig:
    """Get the default configuration."""
    return ReposyncConfig()


def load_config(config_path: Path | None = None) -> ReposyncConfig:
    """Load or create configuration."""
    config = ReposyncConfig.load(config_path)
    config.ensure_directories()
    return config
