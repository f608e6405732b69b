"""Post-run removal of auxiliary files from a build output directory."""

import fnmatch
import os
import shutil
from pathlib import Path
from typing import Union

from ..output.sink import LogSink

# Version control metadata and Unity .meta sidecars
DIRECTORY_PATTERNS = (".svn", ".git")
FILE_PATTERNS = ("*.meta",)


class OutputDirectoryCleaner:
    """Strips version control folders and .meta files from build output."""

    def __init__(self, sink: LogSink):
        self.sink = sink

    def clean(self, root: Union[str, Path]) -> int:
        """Recursively remove auxiliary entries under root.

        Failures are logged and skipped. An empty root is skipped.

        Returns:
            Number of removed files and directories.
        """
        if not str(root).strip():
            self.sink.log("No output directory configured, skipping clean")
            return 0

        root = Path(root)
        if not root.is_dir():
            self.sink.log(f"Nothing to clean, not a directory: {root}")
            return 0

        self.sink.log(f"Cleaning output directory: {root}")
        removed = 0

        for dirpath, dirnames, filenames in os.walk(root, onerror=self.sink.log_exception):
            for name in list(dirnames):
                if not _matches(name, DIRECTORY_PATTERNS):
                    continue
                # Never descend into a directory being removed
                dirnames.remove(name)
                if self._remove(Path(dirpath) / name, shutil.rmtree):
                    removed += 1

            for name in filenames:
                if _matches(name, FILE_PATTERNS) and self._remove(
                    Path(dirpath) / name, os.remove
                ):
                    removed += 1

        self.sink.log(f"Removed {removed} auxiliary entries")
        return removed

    def _remove(self, path: Path, remover) -> bool:
        try:
            remover(path)
        except OSError as e:
            self.sink.log_exception(e)
            return False
        return True


def _matches(name: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)
