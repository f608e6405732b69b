"""Output module - log sinks and run reports."""

from .json_reporter import JsonReporter
from .sink import CollectingSink, ConsoleSink, LogSink

__all__ = [
    "CollectingSink",
    "ConsoleSink",
    "JsonReporter",
    "LogSink",
]
