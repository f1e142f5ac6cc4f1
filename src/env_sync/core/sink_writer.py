"""Change-detecting file writes."""

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional


def read_existing(path: Path) -> Optional[str]:
    """Return current file content, or None when the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def _target_mode(path: Path) -> int:
    """Mode of the existing file, or the umask default for a new one."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_if_changed(path: Path, content: str) -> bool:
    """Write content only if it differs from what is on disk.

    The new content replaces the file in one step, so readers never observe
    a partially written file. Permissions of an existing file are kept.

    Returns:
        True if the file was written, False if it was already up to date.
    """
    data = content.encode("utf-8")
    try:
        if path.read_bytes() == data:
            return False
    except FileNotFoundError:
        pass

    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return True
