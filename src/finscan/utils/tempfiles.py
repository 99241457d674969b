"""Scoped staging of uploaded documents on disk."""
import os
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .logger import get_logger

logger = get_logger()

_SUFFIXES = {
    "application/pdf": ".pdf",
    "image/jpeg": ".jpg",
    "image/png": ".png",
}


@contextmanager
def staged_upload(content: bytes, media_type: str, temp_dir: Optional[str] = None) -> Iterator[Path]:
    """
    Write upload bytes to a uniquely named temp file for the duration of a block.

    The file is removed exactly once when the block exits, whatever the exit
    path (normal return or any exception).

    Args:
        content: Raw upload bytes
        media_type: Declared media type, used for the file suffix
        temp_dir: Directory for the file (system temp dir when None)

    Yields:
        Path to the staged file
    """
    if temp_dir:
        Path(temp_dir).mkdir(parents=True, exist_ok=True)

    fd, name = tempfile.mkstemp(
        prefix=f"upload-{uuid.uuid4().hex}-",
        suffix=_SUFFIXES.get(media_type, ""),
        dir=temp_dir,
    )
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        logger.debug(f"Staged {len(content)} bytes at {path.name}")
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed staged upload {path.name}")
