"""Tail module - log file following."""

from .listener import SinkTailListener, TailListener
from .state import FileIdentity, MarkerState, TailState
from .tailer import DEFAULT_POLL_INTERVAL, LogTailer

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "FileIdentity",
    "LogTailer",
    "MarkerState",
    "SinkTailListener",
    "TailListener",
    "TailState",
]
