"""Map a calendar date to one image of the pool.

Every image gets a score for the day: the first 8 bytes (big-endian) of
``SHA256(SHA256(day) || image_name)``. The image with the highest score
wins. The same pool and date always give the same image, consecutive days
look random, and the result does not depend on the order the pool was
listed in. Adding or removing an image may change the pick for any date.
"""

import hashlib
from datetime import date, datetime
from typing import Iterable, Optional

from motd.config import local_today

# Earliest date we hand out images for
EPOCH = date(2000, 1, 1)


class SelectionError(Exception):
    """Raised when no image can be selected for a date."""

    pass


class EmptyPoolError(SelectionError):
    """The image pool has no entries."""

    pass


class FutureDateError(SelectionError):
    """The requested date is after today."""

    pass


class DateTooEarlyError(SelectionError):
    """The requested date is before EPOCH."""

    pass


def date_digest(day: date) -> bytes:
    """SHA-256 of the ISO date string (YYYY-MM-DD)."""
    return hashlib.sha256(day.isoformat().encode("ascii")).digest()


def image_score(digest: bytes, image: str) -> int:
    """Score of an image for the day whose digest is given."""
    hashed = hashlib.sha256(digest + image.encode("utf-8")).digest()
    return int.from_bytes(hashed[:8], "big")


def select_image(
    images: Iterable[str],
    day: date,
    *,
    today: Optional[date] = None,
) -> str:
    """Return the image name for ``day``.

    Args:
        images: Image identifiers, in any order.
        day: Date to select for. A datetime is reduced to its own date.
        today: Current date in the configured timezone. Looked up when None.

    Raises:
        EmptyPoolError: No images to choose from.
        FutureDateError: ``day`` is after ``today``.
        DateTooEarlyError: ``day`` is before 2000-01-01.
    """
    pool = sorted(images)
    if not pool:
        raise EmptyPoolError("image list is empty")

    if isinstance(day, datetime):
        day = day.date()
    if today is None:
        today = local_today()

    if day > today:
        raise FutureDateError(f"date {day.isoformat()} is in the future")
    if day < EPOCH:
        raise DateTooEarlyError(
            f"date {day.isoformat()} is before the supported range ({EPOCH.isoformat()})"
        )

    digest = date_digest(day)
    selected = pool[0]
    best = image_score(digest, selected)
    for image in pool[1:]:
        score = image_score(digest, image)
        # Strictly greater: ties go to the earlier name
        if score > best:
            best = score
            selected = image
    return selected
