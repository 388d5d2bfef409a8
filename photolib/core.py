import fnmatch
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from tqdm import tqdm

from . import config
from .exceptions import DuplicateEntryError
from .index.store import IndexStore
from .models import LibraryEntry, PlannedMove, SortPolicy, UnsortedFile
from .organization.mover import FileMover
from .organization.rules import DestinationPlanner
from .scanning.hasher import ContentHash


class Library:
    """
    A content-addressed collection of files under an output root.

    The in-memory entries are the source of truth during a session; they are
    only written back by an explicit persist(). No two entries share a hash.
    """

    def __init__(self, output_root: Path, entries: Iterable[LibraryEntry] = ()):
        self.output_root = output_root
        self.meta_root = output_root / config.META_DIR_NAME
        self._store = IndexStore(self.meta_root)
        self._entries: List[LibraryEntry] = []
        self._hashes = set()
        for entry in entries:
            self._record(entry)

    @classmethod
    def load(cls, output_root: Path) -> "Library":
        """Loads the library at `output_root`; a new root yields an empty library."""
        library = cls(output_root)
        for entry in library._store.load():
            library._record(entry)
        logging.info(f"Loaded library at {output_root} ({len(library)} entries)")
        return library

    @property
    def entries(self) -> Tuple[LibraryEntry, ...]:
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, file_hash: ContentHash):
        return file_hash in self._hashes

    def check_new(self, candidates: Iterable[Path], show_progress: Optional[bool] = None) -> List[UnsortedFile]:
        """
        Hashes each candidate and returns those whose content the library
        has not seen. Matching is by hash only; names and paths are ignored.

        A candidate repeating the content of an earlier candidate in the same
        batch is skipped too, so the result never holds two equal hashes.
        """
        candidates = list(candidates)
        new_files = []
        batch_hashes = set()

        for path in tqdm(candidates, desc="Hashing", disable=_tqdm_disable(show_progress)):
            file_hash = ContentHash.compute(path)
            if file_hash in self._hashes:
                logging.debug(f"File already in library: {path} ({file_hash})")
            elif file_hash in batch_hashes:
                logging.debug(f"Duplicate within batch: {path} ({file_hash})")
            else:
                logging.debug(f"Found new file: {path} ({file_hash})")
                batch_hashes.add(file_hash)
                new_files.append(UnsortedFile(path=path, hash=file_hash))

        logging.info(f"{len(new_files)} of {len(candidates)} files are new")
        return new_files

    def plan(self, files: Iterable[UnsortedFile], policy: SortPolicy) -> List[PlannedMove]:
        """Computes destinations for `files` without touching the filesystem."""
        planner = DestinationPlanner(self.output_root, (e.path for e in self._entries))
        return planner.plan_all(files, policy)

    def place(self,
              files: Iterable[UnsortedFile],
              policy: SortPolicy,
              show_progress: Optional[bool] = None) -> List[LibraryEntry]:
        """
        Moves each file into the output tree under `policy`, in order, and
        records it once the move has succeeded.

        Stops at the first failure. Files before it stay moved and recorded
        in memory; whether to persist that partial state is the caller's call.
        """
        files = list(files)
        batch_hashes = set()
        for f in files:
            if f.hash in self._hashes or f.hash in batch_hashes:
                raise DuplicateEntryError(f"{f.path} ({f.hash}) is already in the library or batch")
            batch_hashes.add(f.hash)

        logging.info(f"Sorting {len(files)} files (policy={policy.value})")
        planner = DestinationPlanner(self.output_root, (e.path for e in self._entries))
        mover = FileMover(self.output_root)
        added = []

        for f in tqdm(files, desc="Sorting", disable=_tqdm_disable(show_progress)):
            planned = planner.plan(f, policy)
            mover.move(f.path, planned.relative_path)
            entry = LibraryEntry(hash=f.hash, path=planned.relative_path)
            self._record(entry)
            added.append(entry)

        return added

    def persist(self):
        """Writes the complete current entry set to the index file."""
        self._store.persist(self._entries)
        logging.info(f"Persisted {len(self)} entries to {self._store.index_path}")

    def query(self, pattern: str) -> List[LibraryEntry]:
        """Entries whose stored relative path matches the glob `pattern`."""
        return [e for e in self._entries if fnmatch.fnmatchcase(e.path, pattern)]

    def _record(self, entry: LibraryEntry):
        if entry.hash in self._hashes:
            raise DuplicateEntryError(f"Hash {entry.hash} is already in the library")
        self._hashes.add(entry.hash)
        self._entries.append(entry)


def _tqdm_disable(show_progress: Optional[bool]) -> Optional[bool]:
    # None lets tqdm decide (it hides itself when not attached to a tty)
    return None if show_progress is None else not show_progress
