"""Build process - launches Unity and drives a UnityRunner around it.

Coordinates the full run:
1. Start the runner (pre-clean, stale log removal, log follow)
2. Spawn Unity with the resolved command line
3. Wait for exit, optionally bounded by a timeout
4. Let the follower drain the last output, then stop it
5. Post-run cleanup
"""

import subprocess
import time
from dataclasses import dataclass, field
from typing import Optional

from ..config.schema import RunConfiguration
from ..output.json_reporter import JsonReporter
from ..output.sink import CollectingSink, LogSink
from ..tail.tailer import DEFAULT_POLL_INTERVAL
from .unity_runner import UnityRunner


@dataclass
class RunResult:
    """Complete result of a Unity run."""
    executable: str
    args: list[str] = field(default_factory=list)
    exit_code: Optional[int] = None
    duration_ms: int = 0
    line_count: int = 0
    log_path: Optional[str] = None
    warnings: list[str] = field(default_factory=list)
    error: Optional[str] = None
    report_path: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.exit_code == 0

    def to_report(self) -> dict:
        return JsonReporter().generate(
            executable=self.executable,
            args=self.args,
            exit_code=self.exit_code,
            duration_ms=self.duration_ms,
            line_count=self.line_count,
            log_path=self.log_path,
            warnings=self.warnings,
            error=self.error,
        )

    def to_flow_json(self) -> dict:
        """Convert to flow CLI compatible JSON output."""
        return JsonReporter().generate_flow_output(self.to_report(), self.report_path)


class BuildProcess:
    """Runs Unity once and follows its log until it exits."""

    def __init__(
        self,
        configuration: RunConfiguration,
        sink: LogSink,
        timeout: Optional[float] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """Initialize the build process.

        Args:
            configuration: Run configuration.
            sink: Receives status messages and log lines.
            timeout: Seconds before Unity is killed. None = wait forever.
            poll_interval: Seconds between log polls.
        """
        self.configuration = configuration
        self.sink = CollectingSink(forward=sink)
        self.timeout = timeout
        self.poll_interval = poll_interval

    def run(self) -> RunResult:
        """Execute the run.

        Returns:
            RunResult; launch failures and timeouts are recorded, not raised.
        """
        start_time = time.time()
        runner = UnityRunner(self.configuration, self.sink, poll_interval=self.poll_interval)

        result = RunResult(
            executable=runner.get_executable(),
            args=runner.get_args(),
            log_path=self.configuration.interested_log_path,
        )

        runner.start()
        try:
            result.exit_code = self._launch(result.executable, result.args)

        except subprocess.TimeoutExpired:
            result.error = f"Timeout: Unity did not exit within {self.timeout}s"
            self.sink.log(f"ERROR: {result.error}")

        except OSError as e:
            result.error = f"Failed to launch Unity: {e}"
            self.sink.log_exception(e)

        finally:
            # One more poll picks up what Unity wrote just before exiting
            runner.tailer.wait_for_poll(timeout=self.poll_interval * 2 + 1)
            runner.stop()
            runner.tailer.join(timeout=self.poll_interval * 2 + 1)
            runner.optionally_cleanup_after()
            result.duration_ms = int((time.time() - start_time) * 1000)

        result.line_count = runner.line_count
        result.warnings = [f"{type(e).__name__}: {e}" for e in self.sink.exceptions]
        return result

    def _launch(self, executable: str, args: list[str]) -> int:
        cmd = [executable] + args
        self.sink.log(f"Launching: {subprocess.list2cmdline(cmd)}")

        with subprocess.Popen(
            cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        ) as process:
            try:
                return process.wait(timeout=self.timeout)
            except BaseException:
                # Unity must not outlive the run
                process.kill()
                process.wait()
                raise
