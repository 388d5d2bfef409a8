import logging
import shutil
from pathlib import Path

from ..exceptions import FileOperationError


class FileMover:
    def __init__(self, output_root: Path):
        self.output_root = output_root

    def move(self, src: Path, rel_path: str) -> Path:
        """
        Moves `src` to `output_root/rel_path`, creating parent folders on
        demand. Refuses to overwrite an existing file.
        """
        dest = self.output_root / rel_path
        if dest.exists():
            raise FileOperationError(f"Refusing to overwrite {dest}")

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Could not create {dest.parent}: {e}") from e

        try:
            shutil.move(str(src), str(dest))
        except OSError as e:
            raise FileOperationError(f"Failed to move {src} -> {dest}: {e}") from e

        logging.info(f"Sorted {src} into {dest}")
        return dest
