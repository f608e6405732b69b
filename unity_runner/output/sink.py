"""Log sinks receiving runner status messages and tailed log lines."""

import sys
import traceback
from dataclasses import dataclass, field
from typing import Optional, Protocol, TextIO


class LogSink(Protocol):
    """Destination for plain-text messages and exceptions."""

    def log(self, message: str) -> None: ...

    def log_exception(self, error: BaseException) -> None: ...


class ConsoleSink:
    """Prints messages to stdout and exceptions with traceback to stderr."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        prefix: str = "",
    ):
        self._out = out
        self._err = err
        self.prefix = prefix

    def log(self, message: str) -> None:
        print(f"{self.prefix}{message}", file=self._out or sys.stdout, flush=True)

    def log_exception(self, error: BaseException) -> None:
        err = self._err or sys.stderr
        print(f"{self.prefix}ERROR: {type(error).__name__}: {error}", file=err)
        if error.__traceback__ is not None:
            traceback.print_exception(type(error), error, error.__traceback__, file=err)
        err.flush()


@dataclass
class CollectingSink:
    """Keeps every message and exception, optionally forwarding them."""
    messages: list[str] = field(default_factory=list)
    exceptions: list[BaseException] = field(default_factory=list)
    forward: Optional[LogSink] = None

    def log(self, message: str) -> None:
        self.messages.append(message)
        if self.forward:
            self.forward.log(message)

    def log_exception(self, error: BaseException) -> None:
        self.exceptions.append(error)
        if self.forward:
            self.forward.log_exception(error)
