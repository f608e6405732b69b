"""Runner module - Unity run orchestration."""

from .args import build_args, resolve_executable
from .cleaner import OutputDirectoryCleaner
from .cleanup import clear_output_dir, delete_log_file
from .process import BuildProcess, RunResult
from .unity_runner import RunnerState, UnityRunner

__all__ = [
    "BuildProcess",
    "OutputDirectoryCleaner",
    "RunResult",
    "RunnerState",
    "UnityRunner",
    "build_args",
    "clear_output_dir",
    "delete_log_file",
    "resolve_executable",
]
