from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .scanning.hasher import ContentHash


class SortPolicy(Enum):
    """
    Rule deciding where an accepted file lands inside the output root.
    """
    MOVE_TO_ROOT = "move-to-root"   # flatten: output_root/<name>
    DATE = "date"                   # output_root/<year>/<month>/<day>/<name>

    @classmethod
    def parse(cls, value: str) -> "SortPolicy":
        """Accepts the enum value, the member name, or the legacy 'none'."""
        key = value.strip().lower().replace("_", "-")
        if key == "none":
            return cls.MOVE_TO_ROOT
        for policy in cls:
            if key == policy.value:
                return policy
        raise ValueError(f"Unknown sort policy: {value!r}")


@dataclass(frozen=True)
class LibraryEntry:
    """
    One file known to the library.

    `path` is relative to the output root and always uses forward slashes,
    whatever the platform.
    """
    hash: ContentHash
    path: str


@dataclass(frozen=True)
class UnsortedFile:
    """A candidate file that passed the dedup check and awaits sorting."""
    path: Path
    hash: ContentHash


@dataclass(frozen=True)
class PlannedMove:
    source: UnsortedFile
    relative_path: str
