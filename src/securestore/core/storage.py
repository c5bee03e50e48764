"""
File primitives for the encrypted store

> read_file: whole-file read, a missing file is an empty store rather than an error
> write_file_atomic: temp file in the target directory + fsync + os.replace, so the
  target always holds either the old or the new contents
> Missing parent directories are created on write

OSErrors are re-raised as FilesystemError so callers can catch SecureStoreError alone.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .exceptions import FilesystemError

logger = logging.getLogger(__name__)

FILE_MODE = 0o600


def read_file(path: Path | str) -> Optional[bytes]:
    p = Path(path)
    try:
        with open(p, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except OSError as err:
        raise FilesystemError(f"could not read {p}: {err}") from err


def ensure_parent(path: Path | str) -> Path:
    parent = Path(path).parent
    if not parent.exists():
        logger.debug("creating missing directories for %s", parent)
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FilesystemError(f"could not create directory {parent}: {err}") from err
    return parent


def write_file_atomic(path: Path | str, data: bytes) -> None:
    """
    Replace ``path`` with ``data``.

    The bytes go to a temporary file next to the target which is renamed over
    it only once fully written and flushed. On failure the temporary file is
    removed and the original file is left alone.
    """
    p = Path(path)
    parent = ensure_parent(p)

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=parent)
    except OSError as err:
        raise FilesystemError(f"could not create temporary file in {parent}: {err}") from err

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, FILE_MODE)
        os.replace(tmp_path, p)
    except OSError as err:
        raise FilesystemError(f"could not write {p}: {err}") from err
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
