"""Unity runner - lifecycle around a single Unity batch run.

Coordinates:
1. Executable and argument resolution
2. Optional clearing of the output directory
3. Removal of the stale log file
4. Following the log while Unity runs
5. Optional post-run cleanup

Launching Unity itself is left to the caller (see BuildProcess).
"""

from enum import Enum
from typing import Optional

from ..config.schema import RunConfiguration
from ..output.sink import LogSink
from ..tail.listener import SinkTailListener
from ..tail.tailer import DEFAULT_POLL_INTERVAL, LogTailer
from .args import build_args, resolve_executable
from .cleaner import OutputDirectoryCleaner
from .cleanup import clear_output_dir, delete_log_file


class RunnerState(str, Enum):
    CREATED = "created"
    STARTED = "started"
    STOPPED = "stopped"
    CLEANED_UP = "cleaned_up"


class UnityRunner:
    """Prepares the filesystem and follows the Unity log during a run.

    stop() must be called at most once per start(); a second call only
    repeats the stop messages.
    """

    def __init__(
        self,
        configuration: RunConfiguration,
        sink: LogSink,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """Initialize the runner.

        Args:
            configuration: Run configuration, read-only for the whole run.
            sink: Receives status messages and every tailed log line.
            poll_interval: Seconds between log polls. Default: 1.0.
        """
        self.configuration = configuration
        self.sink = sink
        self.poll_interval = poll_interval
        self.state = RunnerState.CREATED
        self.tailer: Optional[LogTailer] = None
        self.listener: Optional[SinkTailListener] = None

    def get_executable(self) -> str:
        """Resolve and log the Unity executable."""
        return resolve_executable(self.configuration, self.sink)

    def get_args(self) -> list[str]:
        return build_args(self.configuration)

    @property
    def line_count(self) -> int:
        """Log lines forwarded to the sink so far."""
        return self.listener.line_count if self.listener else 0

    def start(self) -> None:
        """Prepare the output directory and begin following the log."""
        self.sink.log("[Starting UnityRunner]")

        if self.configuration.clear_before:
            clear_output_dir(self.configuration.build_path, self.sink)

        self._tail_log_file()
        self.state = RunnerState.STARTED

    def stop(self) -> None:
        """Signal the log follower to halt. Returns without waiting for it.

        Raises:
            RuntimeError: If the runner was never started.
        """
        if self.tailer is None:
            raise RuntimeError("UnityRunner.stop() called before start()")

        self.tailer.stop()

        self.sink.log("[log tail process end]")
        self.sink.log("[Stop UnityRunner]")
        self.state = RunnerState.STOPPED

    def optionally_cleanup_after(self) -> None:
        """Strip auxiliary files from the output if clean_after is set."""
        if self.configuration.clean_after:
            OutputDirectoryCleaner(self.sink).clean(self.configuration.build_path)
        self.state = RunnerState.CLEANED_UP

    def _tail_log_file(self) -> None:
        log_path = self.configuration.interested_log_path
        delete_log_file(log_path, self.sink)

        self.sink.log(f"[tailing log file: {log_path}]")

        self.listener = SinkTailListener(self.sink)
        self.tailer = LogTailer(
            log_path,
            self.listener,
            poll_interval=self.poll_interval,
            marker=self.configuration.marker,
        )
        self.tailer.start()
