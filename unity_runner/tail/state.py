"""Follow state owned by a running LogTailer."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MarkerState(str, Enum):
    """Whether tailed lines are delivered yet."""
    SKIPPING = "skipping"
    EMITTING = "emitting"


@dataclass(frozen=True)
class FileIdentity:
    """Device and inode of a followed file, used to spot replacement."""
    device: int
    inode: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "FileIdentity":
        return cls(device=st.st_dev, inode=st.st_ino)


@dataclass
class TailState:
    """Read position and marker progress of one follow operation.

    With a marker the state starts SKIPPING and flips to EMITTING on the
    first line containing it. The matching line itself is not delivered.
    """
    marker: Optional[str] = None
    offset: int = 0
    identity: Optional[FileIdentity] = None
    pending: bytes = b""
    marker_state: MarkerState = MarkerState.EMITTING

    def __post_init__(self):
        if self.marker:
            self.marker_state = MarkerState.SKIPPING

    def reset(self) -> None:
        """Start over at the beginning of a new or truncated file."""
        self.offset = 0
        self.identity = None
        self.pending = b""

    def accept(self, line: str) -> bool:
        """Advance the marker state with a line; True if it should be delivered."""
        if self.marker_state is MarkerState.EMITTING:
            return True
        if self.marker in line:
            self.marker_state = MarkerState.EMITTING
        return False
