"""YAML run file parser.

Parses YAML run files into RunConfiguration objects. Expected layout:

    unity:
      version: 2022.3.10f1
      project_path: ./Game
      execute_method: Builds.PerformBuild
    build:
      target: Android
      path: ./Build
    log:
      path: ./Logs/unity.log
      ignore_before: "Batchmode quit successfully invoked"
    cleanup:
      before: true
      after: true
"""

from pathlib import Path
from typing import Any, Union

import yaml

from .schema import RunConfiguration

# section -> {yaml key: RunConfiguration field}
SECTION_FIELDS: dict[str, dict[str, str]] = {
    "unity": {
        "version": "unity_version",
        "path": "unity_path",
        "serial": "unity_serial",
        "batch_mode": "batch_mode",
        "no_graphics": "no_graphics",
        "quit": "quit",
        "project_path": "project_path",
        "execute_method": "execute_method",
        "extra_opts": "extra_opts",
    },
    "build": {
        "target": "build_target",
        "player": "build_player",
        "path": "build_path",
    },
    "log": {
        "path": "log_path",
        "use_cleaned_log": "use_cleaned_log",
        "ignore_before": "ignore_log_before_text",
    },
    "cleanup": {
        "before": "clear_before",
        "after": "clean_after",
    },
}

BOOL_FIELDS = {
    name for name, f in RunConfiguration.__dataclass_fields__.items()
    if f.type in (bool, "bool")
}


def parse_run_file(file_path: Union[str, Path], **overrides: Any) -> RunConfiguration:
    """Parse a YAML run file into a RunConfiguration.

    Args:
        file_path: Path to the YAML run file.
        **overrides: RunConfiguration fields that replace file values
            (None values are ignored).

    Returns:
        Parsed RunConfiguration.

    Raises:
        FileNotFoundError: If the run file doesn't exist.
        ValueError: If the YAML is malformed or has wrongly typed fields.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Run file not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise ValueError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {file_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty run file: {file_path}")

    return parse_run_data(data, source=str(file_path), **overrides)


def parse_run_data(
    data: dict, source: str = "<inline>", **overrides: Any
) -> RunConfiguration:
    """Parse a run configuration from an already loaded mapping.

    Raises:
        ValueError: If required sections are missing or malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Run file must be a YAML mapping, got {type(data).__name__}")

    if "unity" not in data:
        raise ValueError(f"Missing required section 'unity' in {source}")

    values: dict[str, Any] = {}

    for section, fields in SECTION_FIELDS.items():
        section_data = data.get(section)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            raise ValueError(f"'{section}' must be a mapping in {source}")

        for key, field_name in fields.items():
            if key in section_data and section_data[key] is not None:
                values[field_name] = _coerce(
                    field_name, section_data[key], f"{section}.{key}", source
                )

    if values.get("ignore_log_before_text"):
        values["ignore_log_before"] = True

    for field_name, value in overrides.items():
        if value is None:
            continue
        if field_name not in RunConfiguration.__dataclass_fields__:
            raise ValueError(f"Unknown configuration field '{field_name}'")
        values[field_name] = value

    return RunConfiguration(**values)


def _coerce(field_name: str, value: Any, context: str, source: str) -> Any:
    """Check a YAML scalar against the type of its configuration field."""
    if field_name in BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(
                f"'{context}' must be true or false, got {value!r} ({source})"
            )
        return value

    # YAML reads versions such as 2021.3 as floats
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(
            f"'{context}' must be a string, got {type(value).__name__} ({source})"
        )
    return value
