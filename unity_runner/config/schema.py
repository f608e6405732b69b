"""Run configuration data models.

Defines the immutable configuration consumed by a single Unity batch run,
plus the validation result types shared with the validator.
"""

import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class BuildTarget(str, Enum):
    """Values accepted by Unity's -buildTarget option."""
    STANDALONE = "Standalone"
    WIN = "Win"
    WIN64 = "Win64"
    OSX = "OSXUniversal"
    LINUX64 = "Linux64"
    IOS = "iOS"
    ANDROID = "Android"
    WEBGL = "WebGL"
    WINDOWS_STORE = "WindowsStoreApps"
    TVOS = "tvOS"


class BuildPlayer(str, Enum):
    """Player build flags (without the leading dash)."""
    WINDOWS = "buildWindowsPlayer"
    WINDOWS64 = "buildWindows64Player"
    OSX = "buildOSXUniversalPlayer"
    LINUX64 = "buildLinux64Player"


VALID_BUILD_TARGETS = {e.value.lower() for e in BuildTarget}
VALID_BUILD_PLAYERS = {e.value for e in BuildPlayer}

CLEANED_LOG_SUFFIX = "-cleaned.log"


def default_unity_path(version: str, platform: Optional[str] = None) -> str:
    """Default Unity Hub install location of an editor version.

    Without a version the bare executable name is returned, leaving the
    lookup to PATH.
    """
    platform = platform or sys.platform

    if platform.startswith("win"):
        if not version:
            return "Unity.exe"
        return str(Path("C:/Program Files/Unity/Hub/Editor") / version / "Editor" / "Unity.exe")
    if platform == "darwin":
        if not version:
            return "/Applications/Unity/Unity.app/Contents/MacOS/Unity"
        return f"/Applications/Unity/Hub/Editor/{version}/Unity.app/Contents/MacOS/Unity"
    if not version:
        return "Unity"
    return str(Path.home() / "Unity" / "Hub" / "Editor" / version / "Editor" / "Unity")


def default_editor_log_path(platform: Optional[str] = None) -> str:
    """Location Unity writes Editor.log to when no -logFile is given."""
    platform = platform or sys.platform

    if platform.startswith("win"):
        local_app_data = os.environ.get("LOCALAPPDATA") or str(
            Path.home() / "AppData" / "Local"
        )
        return str(Path(local_app_data) / "Unity" / "Editor" / "Editor.log")
    if platform == "darwin":
        return str(Path.home() / "Library" / "Logs" / "Unity" / "Editor.log")
    return str(Path.home() / ".config" / "unity3d" / "Editor.log")


@dataclass(frozen=True)
class RunConfiguration:
    """Everything a single Unity batch run needs.

    Read-only once constructed; build a new one per run.
    """
    unity_version: str = ""
    unity_path: str = ""
    batch_mode: bool = True
    no_graphics: bool = False
    quit: bool = True
    unity_serial: str = ""
    build_player: str = ""
    build_path: str = ""
    project_path: str = ""
    execute_method: str = ""
    build_target: str = ""
    use_cleaned_log: bool = False
    extra_opts: str = ""
    clear_before: bool = False
    clean_after: bool = False
    ignore_log_before: bool = False
    ignore_log_before_text: str = ""
    log_path: str = ""

    @property
    def resolved_unity_path(self) -> str:
        """Executable to launch: explicit path, else derived from the version."""
        if self.unity_path:
            return self.unity_path
        return default_unity_path(self.unity_version)

    @property
    def interested_log_path(self) -> str:
        """Log file followed during the run."""
        return self.log_path or default_editor_log_path()

    @property
    def cleaned_log_path(self) -> str:
        """Path handed to -cleanedLogFile, next to the followed log."""
        log = Path(self.interested_log_path)
        return str(log.with_name(log.stem + CLEANED_LOG_SUFFIX))

    @property
    def marker(self) -> Optional[str]:
        """Ignore-before text, or None when the feature is off."""
        if self.ignore_log_before and self.ignore_log_before_text:
            return self.ignore_log_before_text
        return None


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
