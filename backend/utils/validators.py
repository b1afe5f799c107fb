"""
Content inspection helpers: MIME sniffing and image dimension probing.
"""

import logging
import mimetypes
from typing import BinaryIO, Optional, Tuple

from PIL import Image, UnidentifiedImageError

try:
    import magic
except ImportError:  # python-magic raises ImportError when libmagic is missing
    magic = None

logger = logging.getLogger(__name__)

SVG_MIME_TYPE = "image/svg+xml"
SNIFF_BYTES = 2048
GENERIC_MIME_TYPES = {"application/octet-stream", "inode/x-empty"}


def sniff_mime_type_from_file(file_path: str) -> Optional[str]:
    """
    Detect the MIME type of a file on disk with python-magic.

    Returns:
        The detected MIME type, or None when sniffing is unavailable,
        the file cannot be read or the result is empty
    """
    if magic is None:
        return None
    try:
        detected = magic.from_file(str(file_path), mime=True)
    except (OSError, magic.MagicException) as e:
        logger.debug(f"Could not sniff MIME type of {file_path}: {e}")
        return None
    return detected or None


def sniff_mime_type_from_stream(stream: BinaryIO) -> Optional[str]:
    """
    Detect the MIME type from the head of a seekable stream.

    The stream position is restored afterwards.
    """
    if magic is None:
        return None
    try:
        position = stream.tell()
        head = stream.read(SNIFF_BYTES)
        stream.seek(position)
        detected = magic.from_buffer(head, mime=True)
    except (OSError, ValueError, magic.MagicException) as e:
        logger.debug(f"Could not sniff MIME type from stream: {e}")
        return None
    return detected or None


def guess_extension(mime_type: Optional[str]) -> Optional[str]:
    """Map a MIME type to its preferred extension without the dot ("image/jpeg" -> "jpg")."""
    if not mime_type or mime_type in GENERIC_MIME_TYPES:
        return None
    extension = mimetypes.guess_extension(mime_type, strict=False)
    return extension.lstrip(".") if extension else None


def probe_dimensions(stream: BinaryIO) -> Optional[Tuple[int, int]]:
    """
    Read (width, height) of a raster image with Pillow.

    Only the header is decoded. The stream is rewound first and left open.

    Returns:
        (width, height), or None when the content is not a decodable image
        or declares more pixels than Pillow will open
    """
    try:
        stream.seek(0)
        with Image.open(stream) as img:
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.debug(f"Could not read image dimensions: {e}")
        return None


def format_dimensions(size: Optional[Tuple[int, int]]) -> Optional[str]:
    """Render (width, height) as "WIDTHxHEIGHT"."""
    if size is None:
        return None
    width, height = size
    return f"{width}x{height}"
