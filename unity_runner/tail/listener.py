"""Callbacks invoked by LogTailer."""

from ..output.sink import LogSink


class TailListener:
    """Receives tailer events. Every callback is optional."""

    def handle(self, line: str) -> None:
        """Called once per delivered line, in file order."""

    def file_not_found(self) -> None:
        """Called on each poll while the file does not exist."""

    def file_rotated(self) -> None:
        """Called when the file shrank or was replaced."""

    def handle_error(self, error: Exception) -> None:
        """Called when a poll fails; polling continues."""

    def stopped(self) -> None:
        """Called once when the poll loop exits."""


class SinkTailListener(TailListener):
    """Forwards tailed lines and read errors to a LogSink."""

    def __init__(self, sink: LogSink):
        self.sink = sink
        self.line_count = 0
        self._waiting_reported = False

    def handle(self, line: str) -> None:
        self.line_count += 1
        self.sink.log(line)

    def file_not_found(self) -> None:
        # Unity creates the log after start-up; say so once
        if not self._waiting_reported:
            self._waiting_reported = True
            self.sink.log("[waiting for log file]")

    def file_rotated(self) -> None:
        self.sink.log("[log file rotated, reading from start]")

    def handle_error(self, error: Exception) -> None:
        self.sink.log_exception(error)
