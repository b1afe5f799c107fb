"""
File handling utilities: name sanitizing and storage path resolution
"""

import re
import unicodedata
from pathlib import Path
from typing import Optional, Tuple

# Characters that must never reach a storage key
UNSAFE_NAME_CHARACTERS = ("#", "/", "\\", " ")

_TEMPLATE_VARIABLE = re.compile(r"\{(user_id|type|filename)\}")


def ensure_directory(path) -> Path:
    """Ensure directory exists, create if not"""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def strip_control_characters(text: str) -> str:
    """Remove every character in a Unicode "C" category (Cc, Cf, Cs, Co, Cn)."""
    return "".join(c for c in text if unicodedata.category(c)[0] != "C")


def normalize_path(path: str) -> str:
    """
    Normalize a relative path without ever raising.

    Backslashes become forward slashes, control characters are dropped,
    empty and "." segments disappear and ".." removes the previous segment
    but can never climb above the root.
    """
    path = strip_control_characters(path.replace("\\", "/"))

    parts = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)

    return "/".join(parts)


def sanitize_filename(filename: str) -> str:
    """
    Derive a storage-safe base name from an untrusted client filename.

    The result never contains "/", "\\", "#" or a space. An empty input gives
    an empty string; callers append a timestamp so the stored name is never
    empty.
    """
    filename = normalize_path(filename)
    filename = strip_control_characters(filename)
    for character in UNSAFE_NAME_CHARACTERS:
        filename = filename.replace(character, "-")
    return filename


def split_client_filename(filename: str) -> Tuple[str, str]:
    """
    Split a client filename into (base name, extension).

    Only the last path segment is considered and the extension is whatever
    follows the last dot, so "archive.tar.gz" gives ("archive.tar", "gz")
    and "README" gives ("README", "").
    """
    basename = filename.replace("\\", "/").rsplit("/", 1)[-1]
    name, dot, extension = basename.rpartition(".")
    if not dot:
        return basename, ""
    return name, extension


def resolve_path(template: str, user_id: Optional[int], file_type: str, filename: str) -> str:
    """
    Expand a storage path template such as "uploads/{user_id}/{type}/{filename}".

    Placeholders are substituted in a single pass, so values containing
    "{type}" are never expanded again. A missing user id becomes an empty
    segment rather than 0.
    """
    values = {
        "user_id": "" if user_id is None else str(user_id),
        "type": file_type,
        "filename": filename,
    }
    path = _TEMPLATE_VARIABLE.sub(lambda match: values[match.group(1)], template)
    return path.strip("/\\")
