"""Executable and command line resolution for Unity batch runs."""

from ..config.schema import RunConfiguration
from ..output.sink import LogSink


def resolve_executable(config: RunConfiguration, sink: LogSink) -> str:
    """Log the requested Unity version and executable, and return the path."""
    executable = config.resolved_unity_path
    sink.log(f"Unity version requested: {config.unity_version}")
    sink.log(f"Unity executable path: {executable}")
    return executable


def build_args(config: RunConfiguration) -> list[str]:
    """Assemble Unity command line arguments in their fixed order.

    Conflicting options are not checked; Unity receives whatever is set.
    extra_opts is always the last token, passed through verbatim even when
    empty.
    """
    args: list[str] = []

    if config.batch_mode:
        args.append("-batchmode")

    if config.no_graphics:
        args.append("-nographics")

    if config.quit:
        args.append("-quit")

    if config.unity_serial:
        args.extend(["-serial", config.unity_serial])

    if config.build_player:
        args.extend([f"-{config.build_player}", config.build_path])

    if config.project_path:
        args.extend(["-projectPath", config.project_path])

    if config.execute_method:
        args.extend(["-executeMethod", config.execute_method])

    if config.build_target:
        args.extend(["-buildTarget", config.build_target])

    if config.use_cleaned_log:
        args.extend(["-cleanedLogFile", config.cleaned_log_path])

    args.append(config.extra_opts)

    return args
