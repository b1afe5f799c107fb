"""
File storage service: the disk capability, a local filesystem disk and the
registry of named disks
"""

import os
import shutil
import logging
import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Dict, Optional
from urllib.parse import quote

import aiofiles
from fastapi.responses import StreamingResponse

from core.config import Settings
from models.upload import Visibility
from utils.error_handlers import StorageError
from utils.file_utils import ensure_directory
from utils.validators import sniff_mime_type_from_file

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

DEFAULT_PERMISSIONS = {
    Visibility.PUBLIC: 0o644,
    Visibility.PRIVATE: 0o600,
}


class Disk(ABC):
    """A named storage backend addressed by relative paths"""

    @abstractmethod
    def put(self, path: str, stream: BinaryIO, visibility: Visibility = Visibility.PUBLIC) -> Optional[str]:
        """Write a stream to ``path``. Returns the path, or None on failure."""

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Raw contents of ``path``"""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete ``path``; deleting an absent path succeeds."""

    @abstractmethod
    def url(self, path: str) -> str:
        pass

    @abstractmethod
    def path(self, path: str) -> str:
        """Backend-local location of ``path``"""

    @abstractmethod
    def size(self, path: str) -> int:
        pass

    @abstractmethod
    def mime_type(self, path: str) -> str:
        pass

    @abstractmethod
    def last_modified(self, path: str) -> int:
        """Unix timestamp of the last write"""

    @abstractmethod
    def get_visibility(self, path: str) -> str:
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: Visibility) -> bool:
        pass

    @abstractmethod
    def response(self, path: str) -> StreamingResponse:
        """Inline streamed response for ``path``"""

    @abstractmethod
    def download(self, path: str, name: Optional[str] = None) -> StreamingResponse:
        """Attachment streamed response for ``path``"""


class LocalDisk(Disk):
    """Disk backed by a directory on the local filesystem"""

    def __init__(
        self,
        root: str,
        base_url: str = "",
        permissions: Optional[Dict[Visibility, int]] = None
    ):
        self.root = ensure_directory(root).resolve()
        self.base_url = base_url.rstrip("/")
        self.permissions = permissions or DEFAULT_PERMISSIONS

    def _full_path(self, path: str) -> Path:
        full_path = (self.root / path.lstrip("/\\")).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            raise StorageError(
                f"Path {path} is outside of the disk root",
                details={"path": path}
            )
        return full_path

    def put(self, path: str, stream: BinaryIO, visibility: Visibility = Visibility.PUBLIC) -> Optional[str]:
        full_path = self._full_path(path)
        try:
            ensure_directory(full_path.parent)
            with open(full_path, "wb") as target:
                shutil.copyfileobj(stream, target, CHUNK_SIZE)
            os.chmod(full_path, self.permissions[Visibility.coerce(visibility)])
        except OSError:
            logger.exception(f"Failed to write file to disk: {path}")
            return None

        logger.info(f"Stored file: {path}")
        return path

    def get(self, path: str) -> bytes:
        return self._full_path(path).read_bytes()

    def exists(self, path: str) -> bool:
        return self._full_path(path).is_file()

    def delete(self, path: str) -> bool:
        full_path = self._full_path(path)
        try:
            full_path.unlink()
        except FileNotFoundError:
            return True
        except OSError:
            logger.exception(f"Failed to delete file: {path}")
            return False

        logger.info(f"Deleted file: {path}")
        return True

    def url(self, path: str) -> str:
        return f"{self.base_url}/{quote(path.lstrip('/'))}"

    def path(self, path: str) -> str:
        return str(self._full_path(path))

    def size(self, path: str) -> int:
        return self._full_path(path).stat().st_size

    def mime_type(self, path: str) -> str:
        full_path = self._full_path(path)
        if not full_path.is_file():
            raise FileNotFoundError(path)
        detected = sniff_mime_type_from_file(str(full_path))
        if detected:
            return detected
        guessed, _ = mimetypes.guess_type(full_path.name)
        return guessed or "application/octet-stream"

    def last_modified(self, path: str) -> int:
        return int(self._full_path(path).stat().st_mtime)

    def get_visibility(self, path: str) -> str:
        mode = self._full_path(path).stat().st_mode & 0o777
        if mode == self.permissions[Visibility.PUBLIC]:
            return Visibility.PUBLIC.value
        return Visibility.PRIVATE.value

    def set_visibility(self, path: str, visibility: Visibility) -> bool:
        full_path = self._full_path(path)
        try:
            os.chmod(full_path, self.permissions[Visibility(visibility)])
        except OSError:
            logger.exception(f"Failed to change visibility of {path}")
            return False
        return True

    async def _iter_file(self, full_path: Path) -> AsyncIterator[bytes]:
        async with aiofiles.open(full_path, "rb") as f:
            while True:
                chunk = await f.read(CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk

    def _streamed(self, path: str, disposition: str) -> StreamingResponse:
        full_path = self._full_path(path)
        headers = {
            "Content-Length": str(self.size(path)),
            "Content-Disposition": disposition,
        }
        return StreamingResponse(
            self._iter_file(full_path),
            media_type=self.mime_type(path),
            headers=headers
        )

    def response(self, path: str) -> StreamingResponse:
        return self._streamed(path, "inline")

    def download(self, path: str, name: Optional[str] = None) -> StreamingResponse:
        filename = name or Path(path).name
        return self._streamed(path, f"attachment; filename*=utf-8''{quote(filename)}")


class DiskManager:
    """Registry of named disks"""

    def __init__(self, disks: Optional[Dict[str, Disk]] = None):
        self._disks: Dict[str, Disk] = dict(disks or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "DiskManager":
        """The "local" (private root) and "public" disks"""
        return cls({
            "local": LocalDisk(settings.STORAGE_ROOT, settings.LOCAL_STORAGE_URL),
            "public": LocalDisk(settings.PUBLIC_STORAGE_ROOT, settings.PUBLIC_STORAGE_URL),
        })

    def register(self, name: str, disk: Disk) -> None:
        self._disks[name] = disk

    def disk(self, name: str) -> Disk:
        try:
            return self._disks[name]
        except KeyError:
            raise StorageError(
                f"Disk [{name}] does not have a configured driver.",
                details={"disk": name}
            )

    def names(self):
        return list(self._disks)
