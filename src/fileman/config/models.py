"""Configuration models describing fileman settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FilemanBaseModel(BaseModel):
    """Shared configuration for fileman Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ClusteringSettings(FilemanBaseModel):
    """Density clustering parameters.

    Attributes:
        time_interval_sec: Neighbourhood radius in seconds of creation-time difference.
        min_cluster_size: Minimum number of files (including the file itself) within the
            radius for a file to seed a cluster.
    """

    time_interval_sec: float = Field(default=600.0, gt=0)
    min_cluster_size: int = Field(default=3, ge=0)


class OutputSettings(FilemanBaseModel):
    """Settings for the materialized symlink tree and file tags.

    Attributes:
        tag_prefix: Prefix for cluster directory names and tags; empty disables tagging.
    """

    tag_prefix: str = "cluster"


class LoggingSettings(FilemanBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class CLIOptions(FilemanBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class FilemanConfig(FilemanBaseModel):
    """Top-level configuration struct for fileman.

    Attributes:
        clustering: Clustering parameters.
        output: Output tree and tagging settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    clustering: ClusteringSettings = Field(default_factory=ClusteringSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "FilemanBaseModel",
    "ClusteringSettings",
    "OutputSettings",
    "LoggingSettings",
    "CLIOptions",
    "FilemanConfig",
]
