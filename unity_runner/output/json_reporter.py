"""JSON report generator for Unity runs.

Generates structured JSON reports from RunResult objects.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


class JsonReporter:
    """Generates JSON reports from Unity run results."""

    def generate(
        self,
        executable: str,
        args: list[str],
        exit_code: Optional[int],
        duration_ms: int = 0,
        line_count: int = 0,
        log_path: Optional[str] = None,
        warnings: Optional[list[str]] = None,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from a run.

        Args:
            executable: Unity executable that was launched.
            args: Arguments passed to it.
            exit_code: Process exit code, None if it never ran to completion.
            duration_ms: Run duration in milliseconds.
            line_count: Number of log lines forwarded.
            log_path: Log file that was followed.
            warnings: Non-fatal problems reported during the run.
            error: Overall error message if the run failed.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        succeeded = error is None and exit_code == 0

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "executable": executable,
            "args": list(args),
            "status": "succeeded" if succeeded else "failed",
            "summary": {
                "exit_code": exit_code,
                "duration_ms": duration_ms,
                "log_lines": line_count,
            },
            "log_path": log_path,
            "warnings": warnings or [],
            "error": error,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_flow_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate flow CLI compatible JSON output.

        Follows the flow JSON output standard:
        {
            "success": bool,
            "command": "build",
            "data": { ... },
            "message": str
        }

        Args:
            report: Run report dictionary.
            report_path: Path where report was saved.

        Returns:
            Flow-compatible JSON output.
        """
        summary = report["summary"]
        succeeded = report["status"] == "succeeded"

        data: dict[str, Any] = {
            "executable": report["executable"],
            "exit_code": summary["exit_code"],
            "duration_ms": summary["duration_ms"],
            "log_lines": summary["log_lines"],
        }

        if report_path:
            data["report_path"] = report_path

        if report.get("error"):
            message = f"Build failed: {report['error']}"
        elif not succeeded:
            message = f"Unity exited with code {summary['exit_code']}"
        else:
            message = "Build succeeded"

        return {
            "success": succeeded,
            "command": "build",
            "data": data,
            "message": message,
        }
