"""Turns uploaded bytes into the plain text that gets stored and translated.

Each supported extension has exactly one handler in ``TextExtractor``;
a new format is added by registering another handler, not by subclassing.
"""

from collections.abc import Callable

from doc_translator.documents.exceptions import ValidationError
from doc_translator.formatting.normalizer import normalize_text
from doc_translator.logging.logger import Log
from doc_translator.pdf.base import BasePdfExtractor
from doc_translator.pdf.exceptions import PdfExtractionError

SUPPORTED_EXTENSIONS: tuple[str, ...] = ("docx", "doc", "pdf", "txt")

EMPTY_PDF_TEXT = "No content extracted from PDF. The PDF may be image-based or encrypted."

DOC_PLACEHOLDER_TEXT = (
    "DOC file parsing not implemented. Please convert to DOCX format "
    "or save as .txt file for text extraction."
)


def pdf_error_text(exc: Exception) -> str:
    return (
        f"Error extracting PDF content: {exc}\n\n"
        "This may be an image-based PDF or the file may be corrupted."
    )


def docx_placeholder_text(file_name: str) -> str:
    return (
        f"DOCX Document: {file_name}\n\n"
        "Unfortunately, DOCX text extraction is not currently available in this service. "
        "Word documents are not parsed on the server.\n\n"
        "To test the full translation functionality, please:\n"
        "1. Copy the text content from your DOCX file\n"
        "2. Save it as a .txt file\n"
        "3. Upload the .txt file instead\n\n"
        "The translation pipeline works with plain text files and demonstrates "
        "the complete workflow."
    )


Handler = Callable[[bytes, str], str]


class TextExtractor:
    """Dispatches extraction on the lowercase file extension."""

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor
        self._handlers: dict[str, Handler] = {
            "txt": self._extract_txt,
            "pdf": self._extract_pdf,
            "docx": self._extract_docx,
            "doc": self._extract_doc,
        }

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def extract(self, content: bytes, extension: str, file_name: str = "") -> str:
        """Return the extracted text for a document.

        PDF failures do not raise: the error is described in the returned text
        so the upload pipeline stays uniform.

        Raises:
            ValidationError: if no handler exists for the extension.
        """
        handler = self._handlers.get(extension.lower())
        if handler is None:
            raise ValidationError(f"Unsupported file type: .{extension}")
        return handler(content, file_name)

    @staticmethod
    def _extract_txt(content: bytes, file_name: str) -> str:
        _ = file_name
        return normalize_text(content.decode("utf-8-sig", errors="replace"))

    def _extract_pdf(self, content: bytes, file_name: str) -> str:
        try:
            text = self._pdf_extractor.extract(content)
        except PdfExtractionError as exc:
            Log.error("PDF extraction failed", file_name=file_name, error=exc)
            return pdf_error_text(exc)
        if not text:
            Log.warning("No text found in PDF", file_name=file_name)
            return EMPTY_PDF_TEXT
        return normalize_text(text)

    @staticmethod
    def _extract_docx(content: bytes, file_name: str) -> str:
        _ = content
        return docx_placeholder_text(file_name)

    @staticmethod
    def _extract_doc(content: bytes, file_name: str) -> str:
        _ = content, file_name
        return DOC_PLACEHOLDER_TEXT
