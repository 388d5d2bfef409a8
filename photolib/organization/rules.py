import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Set

from ..index.format import validate_entry_path
from ..metadata.extract import get_creation_datetime
from ..models import PlannedMove, SortPolicy, UnsortedFile


class DestinationPlanner:
    def __init__(self, output_root: Path, known_paths: Iterable[str] = ()):
        self.output_root = output_root
        # Relative paths already recorded in the index or handed out this run
        self.used_paths: Set[str] = set(known_paths)

    def plan_all(self, files: Iterable[UnsortedFile], policy: SortPolicy) -> List[PlannedMove]:
        return [self.plan(f, policy) for f in files]

    def plan(self, file: UnsortedFile, policy: SortPolicy) -> PlannedMove:
        """
        Picks the relative destination for one file under `policy`.
        Nothing is created or moved here.
        """
        folder = self._folder_for(file.path, policy)
        rel_path = self._resolve_collision(folder, file.path.name)
        # A path the index cannot store must stop the batch before the move
        validate_entry_path(rel_path)
        logging.debug(f"Planned {file.path} -> {rel_path}")
        return PlannedMove(source=file, relative_path=rel_path)

    def _folder_for(self, path: Path, policy: SortPolicy) -> PurePosixPath:
        if policy is SortPolicy.MOVE_TO_ROOT:
            return PurePosixPath()
        if policy is SortPolicy.DATE:
            dt = get_creation_datetime(path)
            return PurePosixPath(str(dt.year), str(dt.month), str(dt.day))
        raise ValueError(f"Unhandled sort policy: {policy}")

    def _resolve_collision(self, folder: PurePosixPath, filename: str) -> str:
        """Ensures the destination is not on disk, in the index, or already planned."""
        stem = Path(filename).stem
        ext = Path(filename).suffix
        candidate = filename
        counter = 1

        while self._is_taken(folder / candidate):
            candidate = f"{stem}_{counter}{ext}"
            counter += 1

        if candidate != filename:
            logging.info(f"Name collision for {folder / filename}, using {candidate}")

        rel_path = (folder / candidate).as_posix()
        self.used_paths.add(rel_path)
        return rel_path

    def _is_taken(self, rel_path: PurePosixPath) -> bool:
        return (
            rel_path.as_posix() in self.used_paths
            or (self.output_root / rel_path).exists()
        )
