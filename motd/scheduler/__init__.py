"""Daily refresh of the published image."""

from motd.scheduler.manager import RefreshScheduler, seconds_until_next_midnight
from motd.scheduler.refresh import DailyRefresher, PublishedAsset

__all__ = ["DailyRefresher", "PublishedAsset", "RefreshScheduler", "seconds_until_next_midnight"]
