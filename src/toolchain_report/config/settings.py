"""Application settings using pydantic-settings.

This module provides environment variable support for configuration
using pydantic-settings. Settings can be overridden via environment
variables with the TOOLCHAIN_REPORT_ prefix.

Environment Variables:
    TOOLCHAIN_REPORT_WORKSPACE: Persistent workspace root (also read from TEST_GOPATH)
    TOOLCHAIN_REPORT_TOOLCHAIN_ROOT: Toolchain source checkout (also read from GOROOT)
    TOOLCHAIN_REPORT_REPORT_PATH: Output report file
    TOOLCHAIN_REPORT_CORPUS_FILE: YAML corpus replacing the built-in one
    TOOLCHAIN_REPORT_SAMPLE_COUNT: Build+test samples per package
    TOOLCHAIN_REPORT_SAMPLE_AGGREGATION: How samples are reduced (min, mean, median)
    TOOLCHAIN_REPORT_FETCH_TOOLCHAIN: Fetch from the remote before checkout
    TOOLCHAIN_REPORT_TIMEOUTS__REBUILD_SECONDS: Toolchain rebuild timeout
    TOOLCHAIN_REPORT_TIMEOUTS__TEST_SECONDS: Per-package build+test timeout
    TOOLCHAIN_REPORT_TIMEOUTS__BENCHMARK_SECONDS: Benchmark suite timeout
    TOOLCHAIN_REPORT_TIMEOUTS__FETCH_SECONDS: Package download timeout
    TOOLCHAIN_REPORT_TIMEOUTS__VCS_SECONDS: Version control command timeout
"""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from toolchain_report.config.defaults import (
    DEFAULT_BENCHMARK_TIMEOUT_SECONDS,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_REBUILD_TIMEOUT_SECONDS,
    DEFAULT_REPORT_NAME,
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_TEST_TIMEOUT_SECONDS,
    DEFAULT_VCS_TIMEOUT_SECONDS,
    SAMPLE_COUNT_MAX,
    SAMPLE_COUNT_MIN,
    TIMEOUT_MAX,
    TIMEOUT_MIN,
)
from toolchain_report.models.enums import SampleAggregation

__all__ = [
    "Settings",
    "TimeoutSettings",
    "get_settings",
]


class TimeoutSettings(BaseModel):
    """Per-process timeouts.

    A process that outlives its timeout is killed and the step fails.

    Attributes:
        rebuild_seconds: Toolchain self-rebuild.
        test_seconds: One build+test sample of one package.
        benchmark_seconds: Benchmark suite run.
        fetch_seconds: Downloading one package.
        vcs_seconds: Any version control command.

    """

    rebuild_seconds: int = Field(
        default=DEFAULT_REBUILD_TIMEOUT_SECONDS, ge=TIMEOUT_MIN, le=TIMEOUT_MAX
    )
    test_seconds: int = Field(
        default=DEFAULT_TEST_TIMEOUT_SECONDS, ge=TIMEOUT_MIN, le=TIMEOUT_MAX
    )
    benchmark_seconds: int = Field(
        default=DEFAULT_BENCHMARK_TIMEOUT_SECONDS, ge=TIMEOUT_MIN, le=TIMEOUT_MAX
    )
    fetch_seconds: int = Field(
        default=DEFAULT_FETCH_TIMEOUT_SECONDS, ge=TIMEOUT_MIN, le=TIMEOUT_MAX
    )
    vcs_seconds: int = Field(
        default=DEFAULT_VCS_TIMEOUT_SECONDS, ge=TIMEOUT_MIN, le=TIMEOUT_MAX
    )


class Settings(BaseSettings):
    """Root settings container.

    Use get_settings() to access the cached singleton instance.

    Attributes:
        workspace: Persistent workspace root. None means a fresh temporary
            directory that is removed at exit.
        toolchain_root: Source checkout of the toolchain under test.
        report_path: Where the report is written.
        corpus_file: Optional YAML corpus definition.
        sample_count: Build+test samples per package.
        sample_aggregation: How samples are reduced to one duration.
        fetch_toolchain: Whether to fetch from the remote before checkout.
        timeouts: Per-process timeouts.

    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLCHAIN_REPORT_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    workspace: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("TOOLCHAIN_REPORT_WORKSPACE", "TEST_GOPATH"),
        description="Persistent workspace root",
    )
    toolchain_root: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "TOOLCHAIN_REPORT_TOOLCHAIN_ROOT", "GOROOT"
        ),
        description="Source checkout of the toolchain under test",
    )
    report_path: Path = Field(
        default=Path(DEFAULT_REPORT_NAME),
        description="Output report file",
    )
    corpus_file: Path | None = Field(
        default=None,
        description="YAML corpus replacing the built-in one",
    )
    sample_count: int = Field(
        default=DEFAULT_SAMPLE_COUNT,
        ge=SAMPLE_COUNT_MIN,
        le=SAMPLE_COUNT_MAX,
        description="Build+test samples per package",
    )
    sample_aggregation: SampleAggregation = Field(
        default=SampleAggregation.min,
        description="How repeated samples are reduced to one duration",
    )
    fetch_toolchain: bool = Field(
        default=True,
        description="Fetch from the toolchain remote before checking out a revision",
    )
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
