"""Background follower for a growing log file.

Polls a single file on a fixed interval and hands every newly appended line
to a TailListener, in file order. The file may not exist yet when following
starts and may be truncated, deleted or replaced while being followed.

Stopping is cooperative. Every listener callback runs under a delivery lock
that also guards checking the stop event, and stop() sets the event while
holding that lock. stop() therefore waits for a callback already in progress,
but once it returns the listener receives nothing more except stopped().
stop() does not wait for the loop itself; use join() for that.
"""

import os
import threading
from pathlib import Path
from typing import Optional, Union

from .listener import TailListener
from .state import FileIdentity, TailState

DEFAULT_POLL_INTERVAL = 1.0


class LogTailer:
    """Follows one log file on a daemon thread."""

    def __init__(
        self,
        path: Union[str, Path],
        listener: TailListener,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        marker: Optional[str] = None,
    ):
        """Initialize the tailer.

        Args:
            path: Log file to follow.
            listener: Receives lines and file events.
            poll_interval: Seconds between polls. Default: 1.0.
            marker: Skip lines until one containing this text has been seen.
        """
        self.path = Path(path)
        self.listener = listener
        self.poll_interval = poll_interval
        self.marker = marker
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._state: Optional[TailState] = None
        self._polled = threading.Condition()
        self._polling = False
        self._poll_count = 0
        self._finished = False
        self._deliver_lock = threading.RLock()

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        """Launch the poll loop and return immediately.

        Raises:
            RuntimeError: If the tailer was already started.
        """
        if self._thread is not None:
            raise RuntimeError("LogTailer can only be started once")

        self._state = TailState(marker=self.marker)
        self._thread = threading.Thread(
            target=self._run,
            args=(self._state, self._stop_event),
            name=f"log-tailer-{self.path.name}",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the poll loop to exit.

        Waits for a listener callback in progress, not for the loop.
        """
        with self._deliver_lock:
            self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the poll loop to exit.

        Returns:
            True if the loop is no longer running.
        """
        if self._thread is not None:
            self._thread.join(timeout)
        return not self.is_alive

    def poll_once(self) -> int:
        """Run a single poll on the calling thread.

        Only meant for a tailer whose loop is not running. Errors propagate.

        Returns:
            Number of lines delivered.
        """
        if self._state is None:
            self._state = TailState(marker=self.marker)
        return self._poll(self._state, self._stop_event)

    def wait_for_poll(self, timeout: Optional[float] = None) -> bool:
        """Block until a poll that began after this call has completed.

        Returns:
            False on timeout or if the loop is not running.
        """
        with self._polled:
            target = self._poll_count + (2 if self._polling else 1)
            return self._polled.wait_for(
                lambda: self._poll_count >= target or self._finished or not self.is_alive,
                timeout,
            ) and self._poll_count >= target

    def _run(self, state: TailState, stop_event: threading.Event) -> None:
        try:
            while not stop_event.is_set():
                with self._polled:
                    self._polling = True
                try:
                    self._poll(state, stop_event)
                except Exception as e:
                    self._deliver(stop_event, self.listener.handle_error, e)
                finally:
                    with self._polled:
                        self._polling = False
                        self._poll_count += 1
                        self._polled.notify_all()

                if stop_event.wait(self.poll_interval):
                    break
        finally:
            self.listener.stopped()
            with self._polled:
                self._finished = True
                self._polled.notify_all()

    def _poll(self, state: TailState, stop_event: threading.Event) -> int:
        try:
            f = open(self.path, "rb")
        except FileNotFoundError:
            self._deliver(stop_event, self.listener.file_not_found)
            return 0

        with f:
            st = os.fstat(f.fileno())
            identity = FileIdentity.from_stat(st)

            if state.identity is not None and (
                identity != state.identity or st.st_size < state.offset
            ):
                state.reset()
                self._deliver(stop_event, self.listener.file_rotated)

            state.identity = identity
            if st.st_size == state.offset:
                return 0

            f.seek(state.offset)
            data = f.read()

        state.offset += len(data)
        chunks = (state.pending + data).split(b"\n")
        # Last chunk is an unterminated line; hold it for the next poll
        state.pending = chunks.pop()

        delivered = 0
        for raw in chunks:
            if stop_event.is_set():
                break
            line = raw.decode("utf-8", errors="replace").rstrip("\r")
            if state.accept(line):
                if not self._deliver(stop_event, self.listener.handle, line):
                    break
                delivered += 1

        return delivered

    def _deliver(self, stop_event: threading.Event, callback, *args) -> bool:
        with self._deliver_lock:
            if stop_event.is_set():
                return False
            callback(*args)
            return True
