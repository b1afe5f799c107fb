"""
Unit tests for extension classification, MIME lookup and icons.
"""

import unittest

from models.upload import FileType
from services.classifier import (
    ARCHIVE_EXTENSIONS, AUDIO_EXTENSIONS, DOCUMENT_EXTENSIONS, FONT_EXTENSIONS,
    IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, all_extensions, classify, document_extensions,
    icon_for_mime_type, icon_path, image_extensions, mime_type_for_filename,
)


class TestClassify(unittest.TestCase):
    """Extension -> FileType"""

    def test_known_extensions(self):
        expected = [
            (IMAGE_EXTENSIONS, FileType.IMAGE),
            (AUDIO_EXTENSIONS, FileType.AUDIO),
            (VIDEO_EXTENSIONS, FileType.VIDEO),
            (DOCUMENT_EXTENSIONS, FileType.DOCUMENT),
            (FONT_EXTENSIONS, FileType.FONT),
            (ARCHIVE_EXTENSIONS, FileType.ARCHIVE),
        ]
        for extensions, file_type in expected:
            for extension in extensions:
                with self.subTest(extension=extension):
                    self.assertEqual(classify(extension), file_type)
                    self.assertEqual(classify(extension.upper()), file_type)

    def test_mixed_case(self):
        self.assertEqual(classify("JpEg"), FileType.IMAGE)
        self.assertEqual(classify("Pdf"), FileType.DOCUMENT)
        self.assertEqual(classify("WOFF2"), FileType.FONT)

    def test_unknown_extensions_are_files(self):
        for extension in ["", "exe", "unknown", "tar.gz", "jpg ", "."]:
            with self.subTest(extension=extension):
                self.assertEqual(classify(extension), FileType.FILE)

    def test_spreadsheets_are_documents(self):
        self.assertEqual(classify("xlsx"), FileType.DOCUMENT)
        self.assertEqual(classify("csv"), FileType.DOCUMENT)
        self.assertNotIn(FileType.SPREADSHEETS, {classify(ext) for ext in all_extensions()})

    def test_extension_helpers(self):
        self.assertIn("png", image_extensions())
        self.assertIn("pdf", document_extensions())
        self.assertIn("7z", all_extensions())
        # Returned lists are copies
        image_extensions().append("xyz")
        self.assertNotIn("xyz", IMAGE_EXTENSIONS)


class TestMimeTypes(unittest.TestCase):
    """Filename -> MIME type"""

    def test_table_lookup_uses_final_extension(self):
        self.assertEqual(mime_type_for_filename("photo.JPG"), "image/jpeg")
        self.assertEqual(mime_type_for_filename("backup.tar.zip"), "application/zip")
        self.assertEqual(mime_type_for_filename("logo.svg"), "image/svg+xml")
        self.assertEqual(mime_type_for_filename("report.pdf"), "application/pdf")

    def test_unknown_missing_file_falls_back(self):
        self.assertEqual(
            mime_type_for_filename("/nonexistent/dir/file.unknownext"),
            "application/octet-stream"
        )


class TestIcons(unittest.TestCase):
    """MIME type -> icon"""

    def test_known_icons(self):
        self.assertEqual(icon_for_mime_type("image/png"), "png.png")
        self.assertEqual(icon_for_mime_type("image/pjpeg"), "jpeg.png")
        self.assertEqual(icon_for_mime_type("application/pdf"), "pdf.png")
        self.assertEqual(icon_for_mime_type("application/x-7z-compressed"), "zip.png")
        self.assertEqual(icon_for_mime_type("audio/mpeg"), "mpeg.png")

    def test_sentinel_and_default(self):
        self.assertEqual(icon_for_mime_type("not-found"), "not-found.png")
        self.assertEqual(icon_for_mime_type("application/x-whatever"), "unknown.png")
        self.assertEqual(icon_for_mime_type(""), "unknown.png")

    def test_icon_path(self):
        self.assertEqual(icon_path("text/css"), "img/file-type-icons/css.png")


if __name__ == '__main__':
    unittest.main()
