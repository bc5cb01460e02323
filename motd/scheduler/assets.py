"""Copy the selected image into the asset directory and clean up old ones."""

import logging
import os
import shutil
import tempfile
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

ASSET_PREFIX = "today_"
ASSET_SUFFIX = ".jpg"


class FileCopyError(Exception):
    """Raised when the selected image cannot be copied into the asset directory."""

    pass


class FileDeleteError(Exception):
    """Raised when a stale asset file cannot be removed."""

    pass


def asset_filename(day: date) -> str:
    """Served filename for ``day``. Embeds the date so caches never reuse it."""
    return f"{ASSET_PREFIX}{day.isoformat()}{ASSET_SUFFIX}"


def is_asset_name(name: str) -> bool:
    return name.startswith(ASSET_PREFIX) and name.endswith(ASSET_SUFFIX)


def publish_asset(source: Path, destination: Path) -> None:
    """Copy ``source`` to ``destination``, replacing any existing file.

    The bytes are written to a temporary file next to the destination and
    moved into place with ``os.replace``, so readers see either the old file
    or the complete new one.
    """
    destination = Path(destination)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=destination.parent, prefix=".publish-", suffix=ASSET_SUFFIX
        )
        with os.fdopen(fd, "wb") as out, open(source, "rb") as src:
            shutil.copyfileobj(src, out)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, destination)
        tmp_name = None
    except OSError as e:
        raise FileCopyError(f"Failed to copy {source} to {destination}: {e}") from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug(f"Could not remove temporary file {tmp_name}")


def remove_asset(path: Path) -> None:
    try:
        Path(path).unlink()
    except OSError as e:
        raise FileDeleteError(f"Error removing previous image {path}: {e}") from e


def prune_assets(asset_dir: Path, keep: str) -> list[str]:
    """Remove every published asset in ``asset_dir`` except ``keep``.

    Failures are logged and skipped. Returns the names that were removed.
    """
    try:
        stale = sorted(
            p for p in Path(asset_dir).iterdir()
            if p.is_file() and is_asset_name(p.name) and p.name != keep
        )
    except OSError as e:
        logger.warning(f"Could not list asset directory {asset_dir}: {e}")
        return []

    removed = []
    for path in stale:
        try:
            remove_asset(path)
        except FileDeleteError as e:
            logger.warning(str(e))
            continue
        logger.info(f"Removed previous image: {path.name}")
        removed.append(path.name)
    return removed
