"""
Upload pipeline: validate, sanitize, classify, resolve the path, write to a
disk and describe the stored file
"""

import time
import uuid
import logging
import secrets
from typing import BinaryIO, Optional

from core.config import Settings
from models.upload import FileType, StoredFile, UploadOptions, UploadRequest, Visibility
from services.classifier import classify
from services.storage import DiskManager
from utils.byte_units import format_bytes
from utils.error_handlers import InvalidFile, InvalidUpload, UploadFailed
from utils.file_utils import resolve_path, sanitize_filename
from utils.validators import (
    SVG_MIME_TYPE,
    format_dimensions,
    guess_extension,
    probe_dimensions,
    sniff_mime_type_from_stream,
)

logger = logging.getLogger(__name__)


class FileUploader:
    """
    Stores uploads on a disk and returns their metadata.

    Stateless apart from its collaborators, so one instance can serve
    concurrent requests.
    """

    def __init__(self, settings: Settings, disks: DiskManager):
        self.settings = settings
        self.disks = disks
        self.defaults = UploadOptions.from_settings(settings)

    def store(self, request: UploadRequest, options: Optional[UploadOptions] = None) -> StoredFile:
        """
        Upload a file, reporting every failure as UploadFailed.

        Raises:
            UploadFailed: Wraps the original error's message and code
        """
        try:
            return self.upload(request, options)
        except Exception as e:
            logger.warning(f"Upload of {request.original_name!r} failed: {e}")
            raise UploadFailed(str(e), original_code=getattr(e, "code", None)) from e

    def upload(self, request: UploadRequest, options: Optional[UploadOptions] = None) -> StoredFile:
        """
        Upload a file to the configured disk.

        Raises:
            InvalidFile: If the transport marked the file invalid, its size is unknown
                or above MAX_UPLOAD_SIZE
            InvalidUpload: If the stream cannot be read or the disk write fails
        """
        try:
            return self._upload(request, options)
        finally:
            request.close()

    def _upload(self, request: UploadRequest, options: Optional[UploadOptions]) -> StoredFile:
        if not request.is_valid:
            raise InvalidFile(request.error_message or "The file was not uploaded successfully.")

        size = request.get_size()
        if size is None:
            raise InvalidFile("File failed to load.")

        max_size = self.settings.MAX_UPLOAD_SIZE
        if max_size and size > max_size:
            raise InvalidFile(
                f"The file exceeds the maximum upload size of {format_bytes(max_size)}.",
                details={"size": size, "max_size": max_size},
            )

        args = self.defaults.merge(options)
        visibility = Visibility.coerce(args.visibility)
        disk_name = args.disk or self.settings.FILESYSTEM_DISK
        disk = self.disks.disk(disk_name)
        user_id = args.user_id

        try:
            stream = request.open()
        except OSError as e:
            raise InvalidUpload("Could not read file from disk...", details={"error": str(e)}) from e

        client_extension = sanitize_filename(request.client_extension)
        normalized_extension = self._normalized_extension(stream, client_extension)

        if args.safe:
            # Random name and content-derived extension; nothing from the client survives
            filename = secrets.token_hex(20)
            extension = normalized_extension
        else:
            # The client filename is untrusted; sanitize_filename strips separators
            # and control characters from both parts
            filename = sanitize_filename(request.client_basename)
            extension = client_extension

        # Second-granularity timestamp: same-second uploads of one name overwrite
        filename_to_store = f"{filename}_{int(time.time())}"
        if extension:
            filename_to_store = f"{filename_to_store}.{extension}"

        file_type = classify(extension)
        file_path = resolve_path(args.path, user_id, file_type.value, filename_to_store)
        dimensions = self._dimensions(stream, file_type, request.mime_type)
        stream.seek(0)

        logger.info(f"Uploading {request.original_name!r} to {disk_name}:{file_path}")
        if not disk.put(file_path, stream, visibility):
            raise InvalidUpload("The file could not be written to disk...", details={"path": file_path})

        return StoredFile(
            type=file_type,
            extension=client_extension,
            normalized_extension=normalized_extension,
            name=filename,
            original_name=request.original_name,
            size=size,
            mime_type=request.mime_type,
            dimensions=dimensions,
            path=file_path,
            url=disk.url(file_path),
            user_id=user_id,
            disk=disk_name,
            visibility=visibility,
            uuid=str(uuid.uuid4()),
        )

    @staticmethod
    def _normalized_extension(stream: BinaryIO, client_extension: str) -> str:
        """Extension guessed from the content, else the client's."""
        return guess_extension(sniff_mime_type_from_stream(stream)) or client_extension

    @staticmethod
    def _dimensions(stream: BinaryIO, file_type: FileType, mime_type: Optional[str]) -> Optional[str]:
        if file_type != FileType.IMAGE or mime_type == SVG_MIME_TYPE:
            return None
        return format_dimensions(probe_dimensions(stream))
