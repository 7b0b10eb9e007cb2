import io
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from doc_translator.documents.service import DocumentService
from doc_translator.extraction.extractor import TextExtractor
from doc_translator.metadata.memory_store import InMemoryMetadataStore
from doc_translator.pdf.pdfplumber_adapter import PdfPlumberAdapter
from doc_translator.storage.memory_store import InMemoryDocumentStore
from doc_translator.translation.base import BaseTranslationProvider
from doc_translator.translation.exceptions import TranslationError


class UppercaseProvider(BaseTranslationProvider):
    """Translates by upper-casing; remembers every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        self.calls.append((text, source_language, target_language))
        return text.upper()


class FailingProvider(BaseTranslationProvider):
    """Fails on every chunk, or only on the chunks listed in fail_on."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[str] = []

    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        self.calls.append(text)
        if self.fail_on is None or text in self.fail_on:
            raise TranslationError("provider unavailable")
        return text.upper()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def metadata_store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()


@pytest.fixture()
def uppercase_provider() -> UppercaseProvider:
    return UppercaseProvider()


@pytest.fixture()
def make_service(
    document_store: InMemoryDocumentStore,
    metadata_store: InMemoryMetadataStore,
) -> Callable[..., DocumentService]:
    """Build a DocumentService over the in-memory stores; keyword overrides allowed."""

    def _make(
        provider: BaseTranslationProvider | None = None,
        **overrides: object,
    ) -> DocumentService:
        options: dict[str, object] = {
            "document_store": document_store,
            "metadata_store": metadata_store,
            "text_extractor": TextExtractor(pdf_extractor=PdfPlumberAdapter()),
            "translation_provider": provider or UppercaseProvider(),
        }
        options.update(overrides)
        return DocumentService(**options)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def service(
    make_service: Callable[..., DocumentService],
    uppercase_provider: UppercaseProvider,
) -> DocumentService:
    return make_service(uppercase_provider)


@pytest.fixture()
def failing_provider_cls() -> type[FailingProvider]:
    return FailingProvider
