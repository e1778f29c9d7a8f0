"""Safe file I/O utilities.

Provides an atomic whole-file replace with file locking (``fcntl``)
and ``fsync`` so the record store is never left half-written.
"""

from __future__ import annotations

import fcntl
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def safe_write_text(path: Path, text: str) -> None:
    """Replace the contents of *path* with *text* atomically.

    * Writes go to a sibling ``.tmp`` file which is ``fsync``'d and then
      renamed over the target, so readers see either the old or the new
      document, never a partial one.
    * ``fcntl.LOCK_EX`` on a sibling ``.lock`` file serialises concurrent
      writers sharing the same path.
    * Parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_path = path.with_name(path.name + ".lock")
    tmp_path = path.with_name(path.name + ".tmp")

    with open(lock_path, "a") as lock:
        fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        finally:
            fcntl.flock(lock.fileno(), fcntl.LOCK_UN)

    logger.debug("Wrote %d bytes to %s", len(text), path)


def read_text(path: Path) -> str | None:
    """Return the contents of *path*, or ``None`` if it does not exist."""
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")
