"""Filesystem preparation before a Unity run.

Everything here is best effort: failures go to the sink and the run
continues.
"""

import shutil
from pathlib import Path
from typing import Union

from ..output.sink import LogSink


def clear_output_dir(path: Union[str, Path], sink: LogSink) -> None:
    """Remove whatever sits at the output path and recreate it empty.

    An empty path means no output directory is configured; nothing is touched.
    """
    if not str(path).strip():
        sink.log("No output directory configured, skipping clear")
        return

    output_dir = Path(path)

    try:
        if output_dir.is_dir():
            sink.log(f"Removing output directory: {output_dir}")
            shutil.rmtree(output_dir)
        elif output_dir.exists():
            sink.log(f"Removing output directory: {output_dir}")
            output_dir.unlink()

        sink.log(f"Creating output directory: {output_dir}")
        output_dir.mkdir(parents=True, exist_ok=True)

    except OSError as e:
        sink.log_exception(e)


def delete_log_file(path: Union[str, Path], sink: LogSink) -> bool:
    """Delete a stale log so the run only sees fresh output.

    Returns:
        False if a log file existed and could not be removed.
    """
    log_file = Path(path)

    if not log_file.exists():
        return True

    sink.log("[delete old log file]")
    try:
        log_file.unlink()
    except OSError:
        sink.log("[FAILED TO DELETE OLD LOG FILE]")
        return False
    return True
