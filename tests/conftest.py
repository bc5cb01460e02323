"""Shared test fixtures for the image of the day."""

from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from motd.scheduler.refresh import DailyRefresher

BERLIN = ZoneInfo("Europe/Berlin")

SAMPLE_IMAGES = {
    "a.jpg": b"\xff\xd8\xff\xe0 image a",
    "b.jpg": b"\xff\xd8\xff\xe0 image b",
    "c.jpg": b"\xff\xd8\xff\xe0 image c",
}


class FakeClock:
    """Settable clock for refresh tests."""

    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def sample_images() -> dict[str, bytes]:
    return dict(SAMPLE_IMAGES)


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Source directory holding a.jpg, b.jpg and c.jpg."""
    folder = tmp_path / "images"
    folder.mkdir()
    for name, data in SAMPLE_IMAGES.items():
        (folder / name).write_bytes(data)
    return folder


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "assets"
    folder.mkdir()
    return folder


@pytest.fixture
def clock() -> FakeClock:
    """Midday on 2024-01-01 in Berlin."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=BERLIN))


@pytest.fixture
def refresher(image_dir: Path, asset_dir: Path, clock: FakeClock) -> DailyRefresher:
    return DailyRefresher(image_dir=image_dir, asset_dir=asset_dir, tz=BERLIN, clock=clock)
