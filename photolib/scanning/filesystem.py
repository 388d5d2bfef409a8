import logging
from pathlib import Path
from typing import Iterable, List


def normalize_extensions(extensions: Iterable[str]) -> set[str]:
    """'JPG', '.jpg' and 'jpg' all mean the same extension."""
    return {ext.strip().lstrip(".").lower() for ext in extensions if ext.strip()}


def ensure_directory(path: Path):
    if not path.exists():
        logging.debug(f"{path} did not exist, creating it")
        path.mkdir(parents=True, exist_ok=True)


def search_input_path(root: Path, extensions: Iterable[str]) -> List[Path]:
    """
    Lists the files directly inside `root` whose extension is wanted.
    Subdirectories are not searched.
    """
    wanted = normalize_extensions(extensions)
    captured = []

    # Sort for stable ordering across platforms
    for p in sorted(root.iterdir(), key=lambda e: e.name.lower()):
        if not p.is_file():
            continue
        ext = p.suffix.lstrip(".").lower()
        if not ext:
            logging.debug(f"No extension for {p}")
        elif ext in wanted:
            logging.debug(f"Capturing {p}")
            captured.append(p)
        else:
            logging.debug(f"Ignoring {p}")

    logging.debug(f"Captured {len(captured)} files from {root}")
    return captured


def gather_inputs(inputs: Iterable[Path], extensions: Iterable[str]) -> List[Path]:
    extensions = list(extensions)
    captured = []
    for root in inputs:
        captured.extend(search_input_path(root, extensions))
    return captured
