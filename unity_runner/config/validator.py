"""Run configuration validator.

Checks a parsed RunConfiguration against the rules Unity itself enforces
loosely or not at all. Nothing here blocks assembling arguments; the CLI
refuses to launch only on errors.
"""

from .schema import (
    RunConfiguration,
    ValidationError,
    ValidationResult,
    VALID_BUILD_PLAYERS,
    VALID_BUILD_TARGETS,
)


def validate_config(config: RunConfiguration) -> ValidationResult:
    """Validate a parsed RunConfiguration.

    Checks:
    - Executable can be determined
    - Build player / build target values and their paths
    - Cleanup and log marker settings

    Args:
        config: Parsed RunConfiguration to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_unity(config, errors, warnings)
    _validate_build(config, errors, warnings)
    _validate_log(config, errors, warnings)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_unity(
    config: RunConfiguration,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    if not config.unity_path and not config.unity_version:
        warnings.append(ValidationError(
            path="unity",
            message="Neither 'path' nor 'version' given. Unity will be looked up on PATH.",
            severity="warning",
        ))

    if not config.project_path:
        warnings.append(ValidationError(
            path="unity.project_path",
            message="No project path. Unity will open its last used project.",
            severity="warning",
        ))

    if config.execute_method and "." not in config.execute_method:
        errors.append(ValidationError(
            path="unity.execute_method",
            message=f"Invalid execute method '{config.execute_method}'. Expected 'ClassName.MethodName'.",
        ))

    if not config.batch_mode and config.no_graphics:
        warnings.append(ValidationError(
            path="unity.no_graphics",
            message="'no_graphics' only has an effect together with 'batch_mode'.",
            severity="warning",
        ))


def _validate_build(
    config: RunConfiguration,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    if config.build_player:
        if config.build_player.startswith("-"):
            errors.append(ValidationError(
                path="build.player",
                message="Build player must be given without the leading '-'.",
            ))
        elif config.build_player not in VALID_BUILD_PLAYERS:
            warnings.append(ValidationError(
                path="build.player",
                message=f"Unknown build player '{config.build_player}'. Known: {', '.join(sorted(VALID_BUILD_PLAYERS))}",
                severity="warning",
            ))
        if not config.build_path:
            errors.append(ValidationError(
                path="build.path",
                message="'player' requires 'path'.",
            ))

    if config.build_target and config.build_target.lower() not in VALID_BUILD_TARGETS:
        warnings.append(ValidationError(
            path="build.target",
            message=f"Unknown build target '{config.build_target}'.",
            severity="warning",
        ))

    if (config.clear_before or config.clean_after) and not config.build_path:
        errors.append(ValidationError(
            path="build.path",
            message="Cleanup before or after the run requires 'path'.",
        ))


def _validate_log(
    config: RunConfiguration,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    if config.ignore_log_before and not config.ignore_log_before_text:
        warnings.append(ValidationError(
            path="log.ignore_before",
            message="Ignoring log output before an empty marker. All lines will be shown.",
            severity="warning",
        ))

    if config.ignore_log_before_text and not config.ignore_log_before:
        warnings.append(ValidationError(
            path="log.ignore_before",
            message="Marker text is set but ignoring is disabled. All lines will be shown.",
            severity="warning",
        ))
