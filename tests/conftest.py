import pytest
from datetime import datetime
from pathlib import Path

from photolib.organization import rules


@pytest.fixture
def output_root(tmp_path):
    """Library root; deliberately not created so bootstrap paths get exercised."""
    return tmp_path / "library"


@pytest.fixture
def incoming(tmp_path):
    d = tmp_path / "incoming"
    d.mkdir()
    return d


@pytest.fixture
def make_file(incoming):
    """Factory writing `content` to incoming/<name> and returning the path."""
    def _make(name: str, content: bytes, folder: Path = None) -> Path:
        p = (folder or incoming) / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
        return p
    return _make


@pytest.fixture
def creation_time(monkeypatch):
    """Pins the creation time the Date policy sees for every file."""
    def _set(dt: datetime):
        monkeypatch.setattr(rules, "get_creation_datetime", lambda path: dt)
    return _set
