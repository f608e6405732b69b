"""CLI entry point for the Unity runner.

    unity-runner <run.yaml> [options]
    python -m unity_runner <run.yaml> [options]

Prints Unity's log while it runs, then a flow JSON result line.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from .config.parser import parse_run_file
from .config.validator import validate_config
from .output.json_reporter import JsonReporter
from .output.sink import ConsoleSink
from .runner.args import build_args
from .runner.process import BuildProcess
from .tail.tailer import DEFAULT_POLL_INTERVAL


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("run_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--unity-path", help="Unity executable (overrides unity.path).")
@click.option("--project-path", help="Project to open (overrides unity.project_path).")
@click.option("--build-path", help="Output directory (overrides build.path).")
@click.option("--log-path", help="Log file to follow (overrides log.path).")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True),
              help="Kill Unity after this many seconds.")
@click.option("--poll-interval", type=click.FloatRange(min=0, min_open=True),
              default=DEFAULT_POLL_INTERVAL, show_default=True,
              help="Seconds between log polls.")
@click.option("--save-report", is_flag=True, help="Save a JSON run report.")
@click.option("--report-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory for saved reports.")
@click.option("--dry-run", is_flag=True, help="Print the command line without running Unity.")
def main(
    run_file: Path,
    unity_path: Optional[str],
    project_path: Optional[str],
    build_path: Optional[str],
    log_path: Optional[str],
    timeout: Optional[float],
    poll_interval: float,
    save_report: bool,
    report_dir: Optional[Path],
    dry_run: bool,
):
    """Run a Unity batch build described by RUN_FILE."""
    try:
        config = parse_run_file(
            run_file,
            unity_path=unity_path,
            project_path=project_path,
            build_path=build_path,
            log_path=log_path,
        )
    except (FileNotFoundError, ValueError) as e:
        output_error(f"Failed to parse run file: {e}")
        sys.exit(1)

    validation = validate_config(config)
    for warning in validation.warnings:
        click.echo(f"Warning: {warning.path}: {warning.message}", err=True)

    if not validation.valid:
        errors_str = "; ".join(f"{e.path}: {e.message}" for e in validation.errors)
        output_error(f"Invalid run file: {errors_str}")
        sys.exit(1)

    if dry_run:
        click.echo(JsonReporter().to_json_string({
            "success": True,
            "command": "build",
            "data": {
                "executable": config.resolved_unity_path,
                "args": build_args(config),
                "log_path": config.interested_log_path,
            },
            "message": "Dry run",
        }, pretty=False))
        return

    process = BuildProcess(
        config,
        ConsoleSink(),
        timeout=timeout,
        poll_interval=poll_interval,
    )

    try:
        result = process.run()
    except KeyboardInterrupt:
        output_error("Build interrupted by user")
        sys.exit(130)

    if save_report:
        result.report_path = _save_report(result, report_dir or Path("."))

    flow_output = result.to_flow_json()
    click.echo(JsonReporter().to_json_string(flow_output, pretty=False))

    if not flow_output.get("success", False):
        sys.exit(1)


def _save_report(result, report_dir: Path) -> Optional[str]:
    """Save run report to file."""
    try:
        reporter = JsonReporter()
        saved_path = reporter.save(result.to_report(), report_dir / "unity_run_report.json")
        click.echo(f"Report saved: {saved_path}", err=True)
        return str(saved_path)
    except OSError as e:
        click.echo(f"Warning: Failed to save report: {e}", err=True)
        return None


def output_error(message: str, **extra):
    """Output error in flow JSON format."""
    output = {
        "success": False,
        "command": "build",
        "data": extra or None,
        "message": message,
    }
    click.echo(JsonReporter().to_json_string(output, pretty=False))


if __name__ == "__main__":
    main()
