"""Select today's image and publish it into the asset directory."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from motd.scheduler.activity_log import ActivityLog, ActivityType
from motd.scheduler.assets import (
    FileCopyError,
    asset_filename,
    prune_assets,
    publish_asset,
)
from motd.selection.mapper import SelectionError, select_image
from motd.selection.pool import DirectoryScanError, scan_image_pool

logger = logging.getLogger(__name__)

IDLE = "idle"
REFRESHING = "refreshing"


@dataclass(frozen=True)
class PublishedAsset:
    """The image currently being served."""

    filename: str
    source: str
    day: date
    published_at: datetime

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "source": self.source,
            "date": self.day.isoformat(),
            "published_at": self.published_at.isoformat(),
        }


class DailyRefresher:
    """Owns the published asset and refreshes it for the current day.

    Refreshes are serialized by a lock. Readers only look at
    ``current_filename``, which is swapped in a single assignment once the
    new file is completely written, so they never see a name whose file
    does not exist yet.
    """

    def __init__(
        self,
        image_dir: Path,
        asset_dir: Path,
        tz: ZoneInfo,
        clock: Optional[Callable[[], datetime]] = None,
        activity: Optional[ActivityLog] = None,
    ):
        self.image_dir = Path(image_dir)
        self.asset_dir = Path(asset_dir)
        self.tz = tz
        self._clock = clock
        self.activity = activity or ActivityLog()
        self.current: Optional[PublishedAsset] = None
        self.state = IDLE
        self.last_refresh: Optional[datetime] = None
        self.last_error: Optional[str] = None
        self.refresh_count = 0
        self._lock = asyncio.Lock()

    def now(self) -> datetime:
        """Current time in the configured timezone."""
        if self._clock is not None:
            return self._clock().astimezone(self.tz)
        return datetime.now(self.tz)

    @property
    def current_filename(self) -> Optional[str]:
        current = self.current
        return current.filename if current else None

    @property
    def current_path(self) -> Optional[Path]:
        current = self.current
        return self.asset_dir / current.filename if current else None

    async def refresh_now(self) -> Optional[PublishedAsset]:
        """Run one refresh cycle.

        Returns the newly published asset, or None when the cycle failed and
        the previous asset was left in place.
        """
        async with self._lock:
            self.state = REFRESHING
            self.activity.log(ActivityType.REFRESH_START, "Updating image for today...", self.now())
            try:
                asset = await self._refresh()
            except (SelectionError, DirectoryScanError, FileCopyError) as e:
                self.last_error = f"{type(e).__name__}: {e}"
                self.activity.log(
                    ActivityType.REFRESH_ERROR,
                    "Refresh failed, keeping previous image",
                    self.now(),
                    details=self.last_error,
                    status="error",
                )
                return None
            finally:
                self.state = IDLE
                self.last_refresh = self.now()

            self.last_error = None
            self.refresh_count += 1
            self.activity.log(
                ActivityType.REFRESH_COMPLETE,
                f"Today's image: {asset.source}",
                self.now(),
                details=asset.filename,
                status="success",
            )
            return asset

    async def _refresh(self) -> PublishedAsset:
        images = await asyncio.to_thread(scan_image_pool, self.image_dir)

        now = self.now()
        today = now.date()
        selected = select_image(images, today, today=today)

        filename = asset_filename(today)
        await asyncio.to_thread(
            publish_asset, self.image_dir / selected, self.asset_dir / filename
        )

        previous = self.current
        asset = PublishedAsset(
            filename=filename,
            source=selected,
            day=today,
            published_at=now,
        )
        self.current = asset

        if previous is None:
            logger.info("No previous image to remove")
        # Also clears leftovers from an earlier run of the process
        await asyncio.to_thread(prune_assets, self.asset_dir, filename)
        return asset

    def status(self) -> dict:
        current = self.current
        return {
            "state": self.state,
            "current": current.to_dict() if current else None,
            "last_refresh": self.last_refresh.isoformat() if self.last_refresh else None,
            "last_error": self.last_error,
            "refresh_count": self.refresh_count,
            "timezone": str(self.tz),
            "image_dir": str(self.image_dir),
        }
