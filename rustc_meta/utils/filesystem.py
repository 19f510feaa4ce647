"""
Filesystem utilities for rustc-meta.

Reads saved ``rustc -vV`` banners for the CLI. Files are read as bytes so
decoding goes through the same path as live compiler output. All
filesystem errors are normalized to ``FileOperationError``. The banner
parser itself never touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from rustc_meta.utils.logger import get_logger
from rustc_meta.constants import MAX_BANNER_SIZE
from rustc_meta.exceptions import FileOperationError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Validate and resolve a file path that must exist."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_bytes(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_BANNER_SIZE,
) -> bytes:
    """Read a saved banner file without decoding it.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).

    Returns:
        Raw file contents.

    Raises:
        FileOperationError: The file is missing, too large, or unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    logger.debug("Reading %s (%d bytes)", path, size)
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc
