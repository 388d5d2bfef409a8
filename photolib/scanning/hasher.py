import hashlib
import re
from dataclasses import dataclass
from pathlib import Path

from .. import config
from ..exceptions import FileHashError, FormatError

_HEX_RE = re.compile(r"[0-9a-fA-F]{%d}" % config.HASH_HEX_LENGTH)


@dataclass(frozen=True, order=True)
class ContentHash:
    """
    SHA-256 digest identifying a file by its content.

    Two files with the same bytes always hash equal, whatever their name or
    location. Ordering and equality compare the raw digest bytes.
    """
    digest: bytes

    def __post_init__(self):
        if len(self.digest) != config.HASH_DIGEST_SIZE:
            raise FormatError(
                f"Expected a {config.HASH_DIGEST_SIZE}-byte digest, got {len(self.digest)} bytes"
            )

    @classmethod
    def compute(cls, path: Path) -> "ContentHash":
        """Reads the entire file once and returns its digest."""
        h = hashlib.sha256()
        try:
            with open(path, 'rb') as f:
                while chunk := f.read(config.HASH_CHUNK_SIZE):
                    h.update(chunk)
        except OSError as e:
            raise FileHashError(path, e.strerror or e) from e
        return cls(h.digest())

    @classmethod
    def decode(cls, text: str) -> "ContentHash":
        if not _HEX_RE.fullmatch(text):
            raise FormatError(
                f"Hash must be exactly {config.HASH_HEX_LENGTH} hex characters: {text!r}"
            )
        return cls(bytes.fromhex(text))

    def encode(self) -> str:
        return self.digest.hex()

    def __str__(self):
        return self.encode()

    def __repr__(self):
        return f"ContentHash({self.encode()})"
