"""Config module - YAML run configuration."""

from .schema import (
    BuildPlayer,
    BuildTarget,
    RunConfiguration,
    ValidationError,
    ValidationResult,
    default_editor_log_path,
    default_unity_path,
)
from .parser import parse_run_data, parse_run_file
from .validator import validate_config

__all__ = [
    "BuildPlayer",
    "BuildTarget",
    "RunConfiguration",
    "ValidationError",
    "ValidationResult",
    "default_editor_log_path",
    "default_unity_path",
    "parse_run_data",
    "parse_run_file",
    "validate_config",
]
