"""
Shared fixtures: isolated settings, temp disks and sample images.
"""

import io

import pytest
from PIL import Image

from core.config import Settings
from services.storage import DiskManager, LocalDisk


def make_jpeg(width: int = 800, height: int = 600) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        FILESYSTEM_DISK="local",
        STORAGE_ROOT=str(tmp_path / "app"),
        LOCAL_STORAGE_URL="/files",
        PUBLIC_STORAGE_ROOT=str(tmp_path / "public"),
        PUBLIC_STORAGE_URL="http://localhost/storage",
    )


@pytest.fixture
def disks(settings):
    return DiskManager.from_settings(settings)


@pytest.fixture
def local_disk(disks) -> LocalDisk:
    return disks.disk("local")


@pytest.fixture
def jpeg_bytes():
    return make_jpeg()


@pytest.fixture
def jpeg_factory():
    """Build JPEG bytes of a given size"""
    return make_jpeg
