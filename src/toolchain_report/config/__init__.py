"""Configuration for toolchain-report.

This module provides the corpus registry, the YAML corpus loader, and
centralized settings via pydantic-settings.
"""

from toolchain_report.config.corpus import Corpus, default_corpus
from toolchain_report.config.exceptions import ConfigurationError
from toolchain_report.config.loader import load_corpus, load_yaml_file
from toolchain_report.config.settings import Settings, TimeoutSettings, get_settings

__all__ = [
    "ConfigurationError",
    "Corpus",
    "default_corpus",
    "get_settings",
    "load_corpus",
    "load_yaml_file",
    "Settings",
    "TimeoutSettings",
]
