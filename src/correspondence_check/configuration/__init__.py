"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_SUITE_FILENAME,
    build_placeholder_suite,
    write_placeholder_suite,
)
from .loader import ConfigurationError, load_check_suite
from .runtime_settings import CheckCase, CheckKind, CheckSettings, CheckSuite, RelationConfig

__all__ = [
    "CheckCase",
    "CheckKind",
    "CheckSettings",
    "CheckSuite",
    "RelationConfig",
    "ConfigurationError",
    "load_check_suite",
    "DEFAULT_SUITE_FILENAME",
    "build_placeholder_suite",
    "write_placeholder_suite",
]
