from doc_translator.config.settings import Settings
from doc_translator.pdf.base import BasePdfExtractor
from doc_translator.pdf.pdfplumber_adapter import PdfPlumberAdapter
from doc_translator.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF engine used by the upload text extractor."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        PdfPlumberAdapter.engine: PdfPlumberAdapter,
        PyMuPdfAdapter.engine: PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        return adapter_cls()
