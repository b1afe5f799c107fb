"""
Read-side file operations against already stored paths
"""

import logging
import threading
from pathlib import PurePosixPath
from typing import Dict, Optional

from fastapi.responses import StreamingResponse

from core.config import Settings
from models.upload import FileMeta, Visibility
from services.storage import Disk, DiskManager
from utils.byte_units import format_bytes
from utils.error_handlers import MissingFile
from utils.time_utils import diff_for_humans

logger = logging.getLogger(__name__)


class DiskCache:
    """Thread-safe memo of requested disk name -> resolved disk name"""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, str] = {}

    def get_or_set(self, key: str, factory) -> str:
        with self._lock:
            if key in self._entries:
                return self._entries[key]
        # Computed outside the lock; a racing duplicate computes the same value
        value = factory()
        with self._lock:
            return self._entries.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class FileManager:
    """Stream, read, delete and describe stored files on a disk"""

    def __init__(self, settings: Settings, disks: DiskManager):
        self.settings = settings
        self.disks = disks
        self.disk_cache = DiskCache()

    def disk_name(self, disk: Optional[str] = None) -> str:
        """The requested disk, or the configured default"""
        return self.disk_cache.get_or_set(
            f"disk_{disk or ''}",
            lambda: disk or self.settings.FILESYSTEM_DISK
        )

    def _disk(self, disk: Optional[str]) -> Disk:
        return self.disks.disk(self.disk_name(disk))

    def get(self, path: str, disk: Optional[str] = None) -> StreamingResponse:
        """Streamed response; a missing path fails inside the disk."""
        return self._disk(disk).response(path)

    def get_file(self, path: str, disk: Optional[str] = None) -> bytes:
        """
        Raises:
            MissingFile: If the path does not exist
        """
        storage = self._disk(disk)
        if not storage.exists(path):
            raise MissingFile(f"File {path} does not exists.", details={"path": path})
        return storage.get(path)

    def url(self, path: str, disk: Optional[str] = None) -> str:
        return self._disk(disk).url(path)

    def path(self, path: str, disk: Optional[str] = None) -> str:
        return self._disk(disk).path(path)

    def download(self, path: str, name: Optional[str] = None, disk: Optional[str] = None) -> StreamingResponse:
        return self._disk(disk).download(path, name)

    def get_visibility(self, path: str, disk: Optional[str] = None) -> str:
        return self._disk(disk).get_visibility(path)

    def set_visibility(self, path: str, visibility: str, disk: Optional[str] = None) -> bool:
        """Returns False for anything other than public/private without touching the disk."""
        if not Visibility.is_valid(visibility):
            return False
        return self._disk(disk).set_visibility(path, Visibility(visibility))

    def remove(self, path: str, throw_error: bool = True, disk: Optional[str] = None) -> bool:
        """
        Delete a file.

        Raises:
            MissingFile: If throw_error is set and the path does not exist
        """
        storage = self._disk(disk)
        if throw_error and not storage.exists(path):
            raise MissingFile("File does not exist!", details={"path": path})

        logger.info(f"Removing {path}")
        return storage.delete(path)

    def meta(self, path: str, disk: Optional[str] = None) -> FileMeta:
        storage = self._disk(disk)
        return FileMeta(
            path=storage.path(path),
            url=storage.url(path),
            visibility=storage.get_visibility(path),
            mime_type=storage.mime_type(path),
            size=format_bytes(storage.size(path)),
            last_modified=diff_for_humans(storage.last_modified(path)),
            name=PurePosixPath(path).name,
        )
