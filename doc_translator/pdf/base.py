from abc import ABC, abstractmethod

from doc_translator.pdf.exceptions import PdfExtractionError

PAGE_SEPARATOR = "\n\n"


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only read pages; joining and error wrapping happen here so every
    engine behaves the same for the upload pipeline.
    """

    engine: str = ""

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes, one paragraph break between pages.

        Raises:
            PdfExtractionError: if the engine fails for any reason.
        """
        try:
            pages = self._read_pages(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} extraction failed: {exc}") from exc
        return PAGE_SEPARATOR.join(page.strip() for page in pages if page.strip())

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the raw text of every page, in order."""
