"""
File classification: extension -> FileType, filename -> MIME type, MIME type -> icon.
"""

from typing import Dict, List, Tuple

from models.upload import FileType
from utils.validators import sniff_mime_type_from_file

DEFAULT_MIME_TYPE = "application/octet-stream"
ICONS_PATH = "img/file-type-icons/"

IMAGE_EXTENSIONS = ["jpg", "pjpg", "jpe", "jpeg", "png", "bmp", "gif", "svg", "svgz",
                    "tiff", "tif", "webp", "ico", "avif"]
AUDIO_EXTENSIONS = ["mp3", "m4a", "ogg", "mpga", "wav"]
VIDEO_EXTENSIONS = ["smv", "movie", "mov", "wvx", "wmx", "wm", "mp4", "mp4v", "mpg4",
                    "mpeg", "mpg", "mpe", "wmv", "avi", "ogv", "3gp", "3g2"]
DOCUMENT_EXTENSIONS = ["css", "csv", "html", "htm", "conf", "log", "txt", "text", "pdf",
                       "doc", "docx", "ppt", "pptx", "pps", "ppsx", "odt", "xls", "xlsx"]
FONT_EXTENSIONS = ["ttc", "otf", "ttf", "woff", "woff2"]
ARCHIVE_EXTENSIONS = ["gzip", "rar", "tar", "zip", "7z"]

# Checked in order; the first list containing the extension wins
CLASSIFICATION_ORDER: List[Tuple[FileType, List[str]]] = [
    (FileType.IMAGE, IMAGE_EXTENSIONS),
    (FileType.AUDIO, AUDIO_EXTENSIONS),
    (FileType.VIDEO, VIDEO_EXTENSIONS),
    (FileType.DOCUMENT, DOCUMENT_EXTENSIONS),
    (FileType.FONT, FONT_EXTENSIONS),
    (FileType.ARCHIVE, ARCHIVE_EXTENSIONS),
]

MIME_TYPES: Dict[str, str] = {
    "txt": "text/plain",
    "htm": "text/html",
    "html": "text/html",
    "php": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "xml": "application/xml",
    "swf": "application/x-shockwave-flash",
    "flv": "video/x-flv",

    # images
    "png": "image/png",
    "jpe": "image/jpeg",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "ico": "image/vnd.microsoft.icon",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "svg": "image/svg+xml",
    "svgz": "image/svg+xml",

    # archives
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "exe": "application/x-msdownload",
    "msi": "application/x-msdownload",
    "cab": "application/vnd.ms-cab-compressed",

    # audio/video
    "mp3": "audio/mpeg",
    "qt": "video/quicktime",
    "mov": "video/quicktime",

    # adobe
    "pdf": "application/pdf",
    "psd": "image/vnd.adobe.photoshop",
    "ai": "application/postscript",
    "eps": "application/postscript",
    "ps": "application/postscript",

    # ms-office
    "doc": "application/msword",
    "rtf": "application/rtf",
    "xls": "application/vnd.ms-excel",
    "ppt": "application/vnd.ms-powerpoint",

    # open office
    "odt": "application/vnd.oasis.opendocument.text",
    "ods": "application/vnd.oasis.opendocument.spreadsheet",
}


def _icon_table() -> Dict[str, str]:
    groups = {
        "jpeg.png": ["image/jpeg", "image/pjpeg", "image/x-jps"],
        "png.png": ["image/png"],
        "gif.png": ["image/gif"],
        "bmp.png": ["image/bmp", "image/x-windows-bmp"],
        "html.png": ["text/html", "text/asp", "text/javascript", "text/ecmascript",
                     "application/x-javascript", "application/javascript",
                     "application/ecmascript"],
        "conf.png": ["text/plain"],
        "css.png": ["text/css"],
        "midi.png": ["audio/aiff", "audio/x-aiff", "audio/midi"],
        "avi.png": ["application/x-troff-msvideo", "video/avi", "video/msvideo",
                    "video/x-msvideo", "video/avs-video"],
        "fla.png": ["video/animaflex"],
        "docx.png": ["application/msword",
                     "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                     "application/vnd.ms-word.document.macroEnabled.12",
                     "application/vnd.ms-word.template.macroEnabled.12",
                     "application/vnd.oasis.opendocument.text", "application/vnd.apple.pages",
                     "application/vnd.ms-xpsdocument", "application/oxps", "application/rtf",
                     "application/wordperfect", "application/octet-stream"],
        "zip.png": ["application/x-compressed", "application/x-7z-compressed",
                    "application/x-gzip", "application/zip", "multipart/x-gzip",
                    "multipart/x-zip"],
        "rar.png": ["application/x-gtar", "application/rar", "application/x-tar"],
        "mpeg.png": ["video/mpeg", "audio/mpeg"],
        "pdf.png": ["application/pdf"],
        "ms-pptx.png": ["application/mspowerpoint", "application/vnd.ms-powerpoint",
                        "application/powerpoint"],
        "ms-xlsx.png": ["application/excel", "application/x-excel", "application/x-msexcel",
                        "application/vnd.apple.numbers",
                        "application/vnd.oasis.opendocument.spreadsheet",
                        "application/vnd.ms-excel.sheet.macroEnabled.12",
                        "application/vnd.ms-excel.sheet.binary.macroEnabled.12",
                        "application/vnd.ms-excel",
                        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"],
        "psd.png": ["image/vnd.adobe.photoshop"],
        "not-found.png": ["not-found"],
    }
    return {mime: icon for icon, mimes in groups.items() for mime in mimes}


ICONS: Dict[str, str] = _icon_table()


def classify(extension: str) -> FileType:
    """
    Map an extension (without the dot, any case) to its FileType.

    Unknown and empty extensions are FileType.FILE.
    """
    extension = (extension or "").lower()
    for file_type, extensions in CLASSIFICATION_ORDER:
        if extension in extensions:
            return file_type
    return FileType.FILE


def mime_type_for_filename(filename: str) -> str:
    """
    MIME type for a filename.

    The final extension is looked up in MIME_TYPES first; otherwise the file
    content is sniffed with libmagic. Falls back to application/octet-stream.
    """
    extension = filename.rsplit(".", 1)[-1].lower()
    if extension in MIME_TYPES:
        return MIME_TYPES[extension]
    return sniff_mime_type_from_file(filename) or DEFAULT_MIME_TYPE


def icon_for_mime_type(mime_type: str) -> str:
    """Icon filename for a MIME type; "unknown.png" when there is none."""
    return ICONS.get(mime_type, "unknown.png")


def icon_path(mime_type: str) -> str:
    return ICONS_PATH + icon_for_mime_type(mime_type)


def all_extensions() -> List[str]:
    """Every extension the classifier knows about"""
    return [ext for _, extensions in CLASSIFICATION_ORDER for ext in extensions]


def image_extensions() -> List[str]:
    return list(IMAGE_EXTENSIONS)


def document_extensions() -> List[str]:
    return list(DOCUMENT_EXTENSIONS)
