import hashlib

import pytest

from photolib.exceptions import FileHashError, FormatError
from photolib.scanning.hasher import ContentHash


def test_compute_matches_sha256(tmp_path):
    p = tmp_path / "sample.bin"
    data = b"hello world" * 10
    p.write_bytes(data)

    h = ContentHash.compute(p)
    assert h.digest == hashlib.sha256(data).digest()
    assert h.encode() == hashlib.sha256(data).hexdigest()


def test_compute_is_deterministic_and_name_independent(tmp_path):
    a = tmp_path / "a.jpg"
    b = tmp_path / "sub" / "completely different.png"
    b.parent.mkdir()
    a.write_bytes(b"same bytes")
    b.write_bytes(b"same bytes")

    assert ContentHash.compute(a) == ContentHash.compute(a)
    assert ContentHash.compute(a) == ContentHash.compute(b)


def test_different_content_differs(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"one")
    b.write_bytes(b"two")
    assert ContentHash.compute(a) != ContentHash.compute(b)


def test_compute_streams_files_larger_than_a_chunk(tmp_path):
    p = tmp_path / "big.bin"
    data = bytes(range(256)) * 1024  # 256 KB, several read chunks
    p.write_bytes(data)
    assert ContentHash.compute(p).digest == hashlib.sha256(data).digest()


def test_compute_missing_file_raises(tmp_path):
    with pytest.raises(FileHashError) as exc:
        ContentHash.compute(tmp_path / "nope.jpg")
    assert "nope.jpg" in str(exc.value)
    assert isinstance(exc.value.__cause__, OSError)


def test_encode_is_64_lowercase_hex():
    h = ContentHash(bytes(range(32)))
    text = h.encode()
    assert len(text) == 64
    assert text == text.lower()
    assert str(h) == text
    assert ContentHash.decode(text) == h


def test_decode_accepts_uppercase():
    h = ContentHash(b"\xab" * 32)
    assert ContentHash.decode("AB" * 32) == h


@pytest.mark.parametrize(
    "text",
    [
        "",
        "a" * 63,
        "a" * 65,
        "g" * 64,
        " " + "a" * 63,
        "a" * 64 + "\n",
        "0x" + "a" * 62,
    ],
)
def test_decode_rejects_bad_text(text):
    with pytest.raises(FormatError):
        ContentHash.decode(text)


def test_digest_length_is_enforced():
    with pytest.raises(FormatError):
        ContentHash(b"\x00" * 31)


def test_ordering_is_bytewise():
    low = ContentHash(b"\x00" * 32)
    high = ContentHash(b"\x01" + b"\x00" * 31)
    assert low < high
    assert sorted([high, low]) == [low, high]
