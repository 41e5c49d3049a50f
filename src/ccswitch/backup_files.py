"""Owner-only backup files holding one credential blob each."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import BACKUP_DIR_MODE, BACKUP_FILE_MODE
from .errors import ReadFailedError, WriteFailedError
from .models import BackupFileInfo

# surrogatepass keeps any Python str (even lone surrogates) byte-reversible.
_ENCODING = "utf-8"
_ENCODING_ERRORS = "surrogatepass"


def ensure_backup_dir(directory: Path) -> None:
    try:
        directory.mkdir(mode=BACKUP_DIR_MODE, parents=True, exist_ok=True)
        os.chmod(directory, BACKUP_DIR_MODE)
    except OSError as exc:
        raise WriteFailedError(directory, f"cannot secure directory ({exc})") from exc


def write_backup(path: Path, blob: str) -> None:
    """Write ``blob`` verbatim via a temp file, then atomically replace ``path``.

    The file ends up mode 0600 and its directory 0700. No newline is added.
    """
    ensure_backup_dir(path.parent)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=_ENCODING,
            errors=_ENCODING_ERRORS,
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as temp_file:
            temp_path = Path(temp_file.name)
            os.chmod(temp_path, BACKUP_FILE_MODE)
            temp_file.write(blob)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_path, path)
        temp_path = None
        os.chmod(path, BACKUP_FILE_MODE)
    except (OSError, UnicodeError) as exc:
        raise WriteFailedError(path, str(exc)) from exc
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)


def read_backup(path: Path) -> str:
    """Return the file contents exactly as written."""
    try:
        with open(
            path, "r", encoding=_ENCODING, errors=_ENCODING_ERRORS, newline=""
        ) as f:
            return f.read()
    except (OSError, UnicodeError) as exc:
        raise ReadFailedError(path, str(exc)) from exc


def backup_exists(path: Path) -> bool:
    return path.is_file()


def describe_backup(path: Path) -> BackupFileInfo | None:
    try:
        st = path.stat()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise ReadFailedError(path, str(exc)) from exc
    if not stat.S_ISREG(st.st_mode):
        return None
    return BackupFileInfo(path=path, mode=stat.S_IMODE(st.st_mode), size_bytes=st.st_size)
