import pymupdf

from doc_translator.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    engine = "pymupdf"

    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            return [page.get_text() for page in doc]
