"""
Text codec for the persisted library index.

Layout:

    <version>
    --START-CONTENT--
    <hash-hex> <relative-path>
    ...

Paths may contain spaces, so each body line is split at the fixed hash
length rather than on whitespace.
"""
from pathlib import PurePosixPath, PureWindowsPath
from typing import Iterable, List

from .. import config
from ..exceptions import CorruptIndexError, FormatError, UnsupportedVersionError
from ..models import LibraryEntry
from ..scanning.hasher import ContentHash

_SEP_AT = config.HASH_HEX_LENGTH


def decode_index(text: str, source="<index>") -> List[LibraryEntry]:
    """
    Parses index text into entries. All-or-nothing: any malformed line
    fails the whole decode.

    An empty document is the bootstrap state and yields no entries.
    """
    if text == "":
        return []

    # Only "\n" ends a line; str.splitlines() would also split on characters
    # that are legal inside a file name.
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    version = _parse_version(lines[0], source)
    if version > config.INDEX_VERSION:
        raise UnsupportedVersionError(source, version, config.INDEX_VERSION)

    if len(lines) < 2 or lines[1] != config.CONTENT_SENTINEL:
        raise CorruptIndexError(source, f"missing {config.CONTENT_SENTINEL} line", line_no=2)

    entries = []
    seen = set()
    for line_no, line in enumerate(lines[2:], start=3):
        entry = _parse_entry(line, source, line_no)
        if entry.hash in seen:
            raise CorruptIndexError(source, f"duplicate hash {entry.hash}", line_no=line_no)
        seen.add(entry.hash)
        entries.append(entry)
    return entries


def encode_index(entries: Iterable[LibraryEntry]) -> str:
    """
    Serializes entries. Validates everything before producing any output
    so a bad entry can never reach the disk.
    """
    entries = list(entries)
    seen = set()
    for entry in entries:
        validate_entry_path(entry.path)
        if entry.hash in seen:
            raise FormatError(f"Duplicate hash in library: {entry.hash}")
        seen.add(entry.hash)

    out = [str(config.INDEX_VERSION), config.CONTENT_SENTINEL]
    out.extend(f"{entry.hash.encode()} {entry.path}" for entry in entries)
    return "\n".join(out) + "\n"


def validate_entry_path(path: str):
    if not path:
        raise FormatError("Entry path is empty")
    if "\n" in path or "\r" in path:
        raise FormatError(f"Entry path contains a line break: {path!r}")
    if PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute():
        raise FormatError(f"Entry path must be relative to the output root: {path!r}")
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        # Undecodable file names reach us as surrogate escapes
        raise FormatError(f"Entry path is not valid UTF-8: {path!r}") from e


def _parse_version(line: str, source) -> int:
    # isdecimal() rejects signs, whitespace and non-ASCII digits
    if not line.isascii() or not line.isdecimal():
        raise CorruptIndexError(source, f"invalid version line {line!r}", line_no=1)
    return int(line)


def _parse_entry(line: str, source, line_no: int) -> LibraryEntry:
    if len(line) < _SEP_AT + 2 or line[_SEP_AT] != " ":
        raise CorruptIndexError(source, f"malformed entry {line!r}", line_no=line_no)
    try:
        file_hash = ContentHash.decode(line[:_SEP_AT])
    except FormatError as e:
        raise CorruptIndexError(source, str(e), line_no=line_no) from e
    path = line[_SEP_AT + 1:]
    try:
        validate_entry_path(path)
    except FormatError as e:
        raise CorruptIndexError(source, str(e), line_no=line_no) from e
    return LibraryEntry(hash=file_hash, path=path)
