import argparse
import logging
import os
import sys
from pathlib import Path

from . import config
from .core import Library
from .exceptions import PhotoLibraryError
from .models import SortPolicy
from .scanning.filesystem import ensure_directory, gather_inputs
from .settings import AppConfig, load_config


def setup_logging(log_dir: Path, verbose: bool):
    """Sets up logging to both console and a file in the library's metadata folder."""
    log_level = logging.DEBUG if verbose else logging.INFO
    env_level = os.environ.get(config.LOG_LEVEL_ENV)
    if env_level:
        log_level = logging.getLevelName(env_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    # Create the folder if it doesn't exist so we can log there
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / config.LOG_FILE_NAME

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Photo Library: content-addressed import & query")

    p.add_argument("action", nargs="?", choices=["import", "query"], default="import",
                   help="What to do (default: import)")
    p.add_argument("pattern", nargs="?", help="Glob pattern for 'query', matched against library paths")

    p.add_argument("--config", type=Path, default=Path(config.DEFAULT_CONFIG_FILE),
                   help=f"Path to a TOML config file (default: {config.DEFAULT_CONFIG_FILE})")
    p.add_argument("--inputs", type=Path, nargs="+", default=None, help="Input directories (not searched recursively)")
    p.add_argument("--output", type=Path, default=None, help="Library output root")
    p.add_argument("--extensions", nargs="+", default=None, help="File extensions to capture, e.g. jpg dng")
    p.add_argument("--sort-policy", type=SortPolicy.parse, default=None,
                   help="How to arrange imported files: move-to-root or date. "
                        "'date' needs a filesystem creation time (macOS, BSD, Windows); "
                        "plain stat() on Linux has none, so it fails there")
    p.add_argument("--dry-run", action="store_true", help="Show planned moves without modifying disk")
    p.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = p.parse_args(argv)
    if args.action == "query" and not args.pattern:
        p.error("query requires a PATTERN")
    return args


def run_import(cfg: AppConfig, dry_run: bool = False, show_progress=None) -> int:
    for input_dir in cfg.inputs:
        ensure_directory(input_dir)

    logging.info("Searching inputs for files")
    captured = gather_inputs(cfg.inputs, cfg.extensions)
    logging.info(f"Captured {len(captured)} files from {len(cfg.inputs)} inputs")

    library = Library.load(cfg.output)
    new_files = library.check_new(captured, show_progress=show_progress)

    if dry_run:
        for planned in library.plan(new_files, cfg.sort_policy):
            logging.info(f"[DRY RUN] Move {planned.source.path} -> {cfg.output / planned.relative_path}")
        return 0

    try:
        library.place(new_files, cfg.sort_policy, show_progress=show_progress)
    except PhotoLibraryError:
        # Files moved before the failure are on disk now; keep the index in step.
        logging.warning(f"Sorting stopped early, saving the {len(library)} entries recorded so far")
        library.persist()
        raise

    library.persist()
    return 0


def run_query(output_root: Path, pattern: str) -> int:
    library = Library.load(output_root)
    matches = library.query(pattern)
    for entry in matches:
        print(f"{entry.hash.encode()} {entry.path}", file=sys.stderr)
    logging.info(f"{len(matches)} entries match {pattern!r}")
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    # 1. Config
    try:
        cfg = load_config(args.config, {
            "inputs": args.inputs,
            "output": args.output,
            "extensions": args.extensions,
            "sort_policy": args.sort_policy,
        })
    except PhotoLibraryError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    # 2. Setup
    cfg.output = cfg.output.resolve()
    ensure_directory(cfg.output)
    setup_logging(cfg.output / config.META_DIR_NAME, args.verbose)

    logging.info("=== Photo Library Started ===")
    logging.debug(f"Config: {cfg}")

    # 3. Execution
    try:
        if args.action == "query":
            return run_query(cfg.output, args.pattern)
        return run_import(cfg, dry_run=args.dry_run, show_progress=False if args.no_progress else None)
    except PhotoLibraryError as e:
        logging.error(str(e))
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
