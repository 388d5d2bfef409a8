import logging
import os
from datetime import datetime
from pathlib import Path

from ..exceptions import MetadataError


def get_creation_datetime(path: Path) -> datetime:
    """
    Returns when the file was created, in local time.

    Uses the filesystem birth time. Windows reports creation time as
    st_ctime; on platforms exposing neither (e.g. plain stat() on Linux)
    there is no creation time to read.
    """
    try:
        st = path.stat()
    except OSError as e:
        raise MetadataError(f"Could not stat {path}: {e}") from e

    ts = getattr(st, "st_birthtime", None)
    if ts is None and os.name == "nt":
        ts = st.st_ctime
    if ts is None:
        raise MetadataError(f"Creation time is not available for {path} on this platform")

    dt = datetime.fromtimestamp(ts)
    logging.debug(f"Creation time for {path.name}: {dt.isoformat()}")
    return dt
