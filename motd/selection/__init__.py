"""Deterministic date to image selection."""

from motd.selection.mapper import (
    EPOCH,
    DateTooEarlyError,
    EmptyPoolError,
    FutureDateError,
    SelectionError,
    select_image,
)
from motd.selection.pool import DirectoryScanError, scan_image_pool

__all__ = [
    "EPOCH",
    "DateTooEarlyError",
    "DirectoryScanError",
    "EmptyPoolError",
    "FutureDateError",
    "SelectionError",
    "scan_image_pool",
    "select_image",
]
