"""
Upload-related models
"""

import os
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO, Optional, Union

from pydantic import BaseModel, ConfigDict

from core.config import Settings, DEFAULT_UPLOAD_PATH
from utils.file_utils import split_client_filename

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    """Semantic file categories"""
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"
    FONT = "font"
    ARCHIVE = "archive"
    DOCUMENT = "document"
    SPREADSHEETS = "spreadsheets"  # declared, never produced by classification


class Visibility(str, Enum):
    """Access policy a disk applies to a stored object"""
    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def coerce(cls, value: Any) -> "Visibility":
        """Return the matching visibility, or PUBLIC for anything unknown."""
        try:
            return cls(value)
        except ValueError:
            return cls.PUBLIC

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        return value in {member.value for member in cls}


class UploadOptions(BaseModel):
    """Per-call upload options; None means "use the default"."""
    disk: Optional[str] = None
    visibility: Optional[str] = None
    user_id: Optional[int] = None
    path: Optional[str] = None
    safe: Optional[bool] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadOptions":
        """Process-wide defaults"""
        return cls(
            disk=settings.FILESYSTEM_DISK,
            visibility=settings.UPLOAD_VISIBILITY,
            user_id=settings.UPLOAD_USER_ID,
            path=settings.UPLOAD_PATH or DEFAULT_UPLOAD_PATH,
            safe=settings.UPLOAD_SAFE,
        )

    def merge(self, overrides: Optional["UploadOptions"]) -> "UploadOptions":
        """Return a copy where every field set on ``overrides`` wins."""
        if overrides is None:
            return self.model_copy()
        changes = {
            key: value
            for key, value in overrides.model_dump().items()
            if value is not None
        }
        return self.model_copy(update=changes)


class StoredFile(BaseModel):
    """Metadata describing a successfully stored upload"""
    model_config = ConfigDict(frozen=True)

    type: FileType
    extension: str
    normalized_extension: str
    name: str
    original_name: str
    size: int
    mime_type: Optional[str] = None
    dimensions: Optional[str] = None  # "WIDTHxHEIGHT", raster images only
    path: str
    url: str
    user_id: Optional[int] = None
    disk: str
    visibility: Visibility
    uuid: str


class FileMeta(BaseModel):
    """On-demand metadata for an already stored path"""
    path: str
    url: str
    visibility: str
    mime_type: str
    size: str
    last_modified: str
    name: str


@dataclass
class UploadRequest:
    """
    An incoming file as reported by the transport layer.

    ``source`` is either a filesystem path (e.g. a temporary upload file) or
    an open binary file object.
    """
    source: Union[str, os.PathLike, BinaryIO]
    original_name: str
    size: Optional[int] = None
    mime_type: Optional[str] = None
    is_valid: bool = True
    error_message: Optional[str] = None

    def __post_init__(self):
        self._stream: Optional[BinaryIO] = None

    @classmethod
    def from_upload_file(cls, upload) -> "UploadRequest":
        """Adapt a Starlette/FastAPI UploadFile"""
        return cls(
            source=upload.file,
            original_name=upload.filename or "",
            size=upload.size,
            mime_type=upload.content_type,
        )

    @property
    def client_extension(self) -> str:
        return split_client_filename(self.original_name)[1]

    @property
    def client_basename(self) -> str:
        return split_client_filename(self.original_name)[0]

    def _is_path(self) -> bool:
        return isinstance(self.source, (str, os.PathLike))

    def get_size(self) -> Optional[int]:
        """Reported size, or the size measured from the source, or None."""
        if self.size is not None:
            return self.size
        try:
            if self._is_path():
                return os.path.getsize(self.source)
            position = self.source.tell()
            size = self.source.seek(0, os.SEEK_END)
            self.source.seek(position)
            return size
        except (OSError, ValueError, AttributeError) as e:
            logger.debug(f"Could not determine size of {self.original_name!r}: {e}")
            return None

    def open(self) -> BinaryIO:
        """
        Open the source for reading, positioned at the start.

        Raises:
            OSError: If the source cannot be opened or rewound
        """
        if self._stream is None:
            if self._is_path():
                self._stream = open(self.source, "rb")
            else:
                try:
                    self.source.seek(0)
                except (AttributeError, ValueError) as e:
                    raise OSError(f"Upload stream is not readable: {e}") from e
                self._stream = self.source
        return self._stream

    def close(self) -> None:
        """Close the stream opened by open(), or the supplied file object."""
        stream = self._stream if self._stream is not None else (
            None if self._is_path() else self.source
        )
        self._stream = None
        if stream is not None and not getattr(stream, "closed", False):
            stream.close()
