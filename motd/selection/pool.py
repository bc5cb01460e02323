"""Discover candidate JPEG images in the source folder."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Matched literally against the end of the filename (case-sensitive)
EXTENSIONS = (".jpg", ".jpeg")


class DirectoryScanError(Exception):
    """Raised when the image directory cannot be read."""

    pass


def is_image_name(name: str) -> bool:
    return name.endswith(EXTENSIONS)


def scan_image_pool(folder: Path) -> tuple[str, ...]:
    """Return the sorted names of JPEG files in ``folder`` (non-recursive).

    Raises:
        DirectoryScanError: ``folder`` is missing, not a directory or unreadable.
    """
    folder = Path(folder)
    try:
        if not folder.is_dir():
            raise DirectoryScanError(f"Not a directory: {folder}")
        names = [
            p.name for p in folder.iterdir()
            if p.is_file() and is_image_name(p.name)
        ]
    except OSError as e:
        raise DirectoryScanError(f"Failed to list {folder}: {e}") from e
    logger.debug(f"Found {len(names)} images in {folder}")
    return tuple(sorted(names))
