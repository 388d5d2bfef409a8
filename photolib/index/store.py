"""
On-disk storage for the library index.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from .. import config
from ..exceptions import CorruptIndexError, FileOperationError
from ..models import LibraryEntry
from .format import decode_index, encode_index


class IndexStore:
    def __init__(self, meta_root: Path):
        self.meta_root = meta_root
        self.index_path = meta_root / config.INDEX_FILE_NAME

    def load(self) -> List[LibraryEntry]:
        """
        Reads the index, bootstrapping an empty one if none exists yet.
        Creating the metadata directory is done here and only here.
        """
        try:
            self.meta_root.mkdir(parents=True, exist_ok=True)
            if not self.index_path.exists():
                logging.info(f"No index at {self.index_path}, starting an empty library")
                self.index_path.write_text(encode_index([]), encoding="utf-8")
                return []
            text = self.index_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptIndexError(self.index_path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
        except OSError as e:
            raise FileOperationError(f"Could not read index {self.index_path}: {e}") from e

        entries = decode_index(text, source=self.index_path)
        logging.debug(f"Loaded {len(entries)} entries from {self.index_path}")
        return entries

    def persist(self, entries: Iterable[LibraryEntry]):
        """
        Replaces the index with `entries`.

        The text is fully encoded (and thereby validated) before the disk is
        touched, then written to a temp file beside the index and renamed
        over it, so a crash leaves either the old or the new index.
        """
        text = encode_index(entries)

        if not self.meta_root.is_dir():
            raise FileOperationError(f"Metadata directory {self.meta_root} does not exist")

        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.meta_root, prefix=f".{config.INDEX_FILE_NAME}.", suffix=".tmp")
        except OSError as e:
            raise FileOperationError(f"Could not create a temp file in {self.meta_root}: {e}") from e

        replaced = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.index_path)
            replaced = True
        except OSError as e:
            raise FileOperationError(f"Could not write index {self.index_path}: {e}") from e
        finally:
            if not replaced:
                Path(tmp_name).unlink(missing_ok=True)

        logging.debug(f"Persisted index to {self.index_path}")
