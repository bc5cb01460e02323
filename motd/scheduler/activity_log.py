"""Activity log for tracking refreshes and scheduler actions."""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Activity types
class ActivityType:
    REFRESH_START = "refresh_start"
    REFRESH_COMPLETE = "refresh_complete"
    REFRESH_ERROR = "refresh_error"
    SCHEDULER = "scheduler"


@dataclass
class ActivityEntry:
    """Single activity log entry."""

    timestamp: datetime
    activity_type: str
    message: str
    details: Optional[str] = None
    status: str = "info"  # info, success, warning, error

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "time_str": self.timestamp.strftime("%H:%M:%S"),
            "activity_type": self.activity_type,
            "message": self.message,
            "details": self.details,
            "status": self.status,
        }


class ActivityLog:
    """In-memory activity log with fixed size."""

    def __init__(self, max_entries: int = 50):
        self._entries: deque[ActivityEntry] = deque(maxlen=max_entries)

    def log(
        self,
        activity_type: str,
        message: str,
        timestamp: datetime,
        details: Optional[str] = None,
        status: str = "info",
    ) -> None:
        """Add an activity to the log."""
        entry = ActivityEntry(
            timestamp=timestamp,
            activity_type=activity_type,
            message=message,
            details=details,
            status=status,
        )
        self._entries.appendleft(entry)

        # Also log to standard logger
        log_level = logging.INFO
        if status == "error":
            log_level = logging.ERROR
        elif status == "warning":
            log_level = logging.WARNING
        logger.log(log_level, f"[Activity] {message}" + (f": {details}" if details else ""))

    def get_entries(self, limit: int = 20) -> list[dict]:
        """Get recent entries as dicts, newest first."""
        entries = list(self._entries)[:limit]
        return [e.to_dict() for e in entries]

    def clear(self) -> None:
        self._entries.clear()
