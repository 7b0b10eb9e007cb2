from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from doc_translator.chunking.chunker import chunk_text
from doc_translator.config.settings import Settings
from doc_translator.documents.exceptions import NotFoundError, ValidationError
from doc_translator.documents.models import DocumentStatus
from doc_translator.documents.service import DocumentService, build_document_service
from doc_translator.formatting.normalizer import normalize_text
from doc_translator.metadata.memory_store import InMemoryMetadataStore
from doc_translator.storage import keys
from doc_translator.storage.exceptions import StorageError
from doc_translator.storage.local_store import LocalDocumentStore
from doc_translator.storage.memory_store import InMemoryDocumentStore
from doc_translator.translation.base import BaseTranslationProvider


class _FailingTextStore(InMemoryDocumentStore):
    """Accepts the original upload but fails to write the extracted text."""

    def put(self, key: str, data: bytes) -> None:
        if key.endswith("text.txt"):
            raise StorageError("disk full")
        super().put(key, data)


class StatusRecordingProvider(BaseTranslationProvider):
    """Records the stored document status at the moment each chunk is translated."""

    def __init__(self, metadata_store: InMemoryMetadataStore) -> None:
        self._metadata_store = metadata_store
        self.seen_statuses: list[str] = []

    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        for record in self._metadata_store._records.values():
            self.seen_statuses.append(record["status"])
        return text


class TestUpload:
    def test_upload_txt_then_status(self, service: DocumentService) -> None:
        result = service.upload(b"Hello world.", "doc.txt")

        assert result.status is DocumentStatus.UPLOADED
        assert result.text_length == len(normalize_text("Hello world."))
        record = service.status(result.document_id)
        assert record["status"] == "uploaded"
        assert record["textLength"] == 12
        assert record["fileName"] == "doc.txt"
        assert record["fileExtension"] == "txt"
        assert record["fileSize"] == 12
        assert record["documentId"] == result.document_id
        assert record["uploadTime"].endswith("Z")
        assert "targetLanguage" not in record

    def test_upload_stores_original_and_text(
        self, service: DocumentService, document_store: InMemoryDocumentStore
    ) -> None:
        result = service.upload(b"Hello   world.", "Doc.TXT")

        assert document_store.keys() == [
            keys.original_key(result.document_id, "txt"),
            keys.text_key(result.document_id),
        ]
        assert document_store.get(keys.original_key(result.document_id, "txt")) == (
            b"Hello   world."
        )
        assert document_store.get_text(keys.text_key(result.document_id)) == "Hello world."

    def test_each_upload_gets_a_new_id(self, service: DocumentService) -> None:
        first = service.upload(b"same", "doc.txt")
        second = service.upload(b"same", "doc.txt")
        assert first.document_id != second.document_id

    def test_pdf_upload(self, service: DocumentService, sample_pdf_bytes: bytes) -> None:
        result = service.upload(sample_pdf_bytes, "hello.pdf")
        text = service.download(result.document_id, "text").content.decode("utf-8")
        assert "Hello PDF World" in text

    def test_corrupted_pdf_upload_still_succeeds(self, service: DocumentService) -> None:
        result = service.upload(b"not a pdf at all", "broken.pdf")
        text = service.download(result.document_id, "text").content.decode("utf-8")
        assert result.status is DocumentStatus.UPLOADED
        assert text.startswith("Error extracting PDF content:")

    def test_docx_upload_stores_placeholder(self, service: DocumentService) -> None:
        result = service.upload(b"PK\x03\x04", "letter.docx")
        text = service.download(result.document_id, "text").content.decode("utf-8")
        assert text.startswith("DOCX Document: letter.docx")

    def test_missing_document(self, service: DocumentService) -> None:
        with pytest.raises(ValidationError, match="No document provided"):
            service.upload(None, None)

    def test_file_too_large(self, make_service: Callable[..., DocumentService]) -> None:
        service = make_service(max_file_size_bytes=10)
        with pytest.raises(ValidationError, match="File too large"):
            service.upload(b"x" * 11, "doc.txt")

    def test_file_at_size_limit_is_accepted(
        self, make_service: Callable[..., DocumentService]
    ) -> None:
        service = make_service(max_file_size_bytes=10)
        assert service.upload(b"x" * 10, "doc.txt").text_length == 10

    def test_unsupported_extension(self, service: DocumentService) -> None:
        with pytest.raises(ValidationError, match="Unsupported file type"):
            service.upload(b"\x89PNG", "image.png")

    def test_size_is_checked_before_extension(
        self, make_service: Callable[..., DocumentService]
    ) -> None:
        service = make_service(max_file_size_bytes=10)
        with pytest.raises(ValidationError, match="File too large"):
            service.upload(b"x" * 11, "image.png")

    def test_rejected_upload_writes_nothing(
        self,
        service: DocumentService,
        document_store: InMemoryDocumentStore,
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        with pytest.raises(ValidationError):
            service.upload(b"data", "archive.zip")
        assert document_store.keys() == []
        assert metadata_store._records == {}

    def test_storage_failure_propagates_without_metadata(
        self,
        make_service: Callable[..., DocumentService],
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        failing_store = MagicMock(spec=InMemoryDocumentStore)
        failing_store.put.side_effect = StorageError("disk full")
        service = make_service(document_store=failing_store)

        with pytest.raises(StorageError, match="disk full"):
            service.upload(b"Hello.", "doc.txt")
        assert metadata_store._records == {}

    def test_failed_text_write_removes_original(
        self,
        make_service: Callable[..., DocumentService],
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        store = _FailingTextStore()
        service = make_service(document_store=store)

        with pytest.raises(StorageError, match="disk full"):
            service.upload(b"Hello world.", "doc.txt")
        assert store.keys() == []
        assert metadata_store._records == {}

    def test_failed_metadata_write_removes_artifacts(
        self,
        make_service: Callable[..., DocumentService],
        document_store: InMemoryDocumentStore,
    ) -> None:
        failing_metadata = MagicMock(spec=InMemoryMetadataStore)
        failing_metadata.put.side_effect = StorageError("connection refused")
        service = make_service(metadata_store=failing_metadata)

        with pytest.raises(StorageError, match="connection refused"):
            service.upload(b"Hello world.", "doc.txt")
        assert document_store.keys() == []


class TestTranslate:
    @pytest.mark.parametrize("language", ["x/../text", "../text", "es\n", "e", "es es"])
    def test_rejects_language_that_is_not_a_code(
        self,
        make_service: Callable[..., DocumentService],
        tmp_path: Path,
        language: str,
    ) -> None:
        store = LocalDocumentStore(root=tmp_path)
        service = make_service(document_store=store)
        uploaded = service.upload(b"Hello world.", "a.txt")

        with pytest.raises(ValidationError, match="Invalid language code"):
            service.translate(uploaded.document_id, language)
        assert store.get_text(keys.text_key(uploaded.document_id)) == "Hello world."
        assert service.status(uploaded.document_id)["status"] == "uploaded"

    def test_rejects_invalid_source_language(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        with pytest.raises(ValidationError, match="Invalid language code"):
            service.translate(uploaded.document_id, "es", "../en")

    @pytest.mark.parametrize("language", ["pt-BR", "zh_Hans", "ES"])
    def test_accepts_regional_language_tags(
        self, service: DocumentService, language: str
    ) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        service.translate(uploaded.document_id, language)
        assert service.download(uploaded.document_id, "translated", language).content == b"HELLO"

    def test_end_to_end_single_chunk(
        self, service: DocumentService, uppercase_provider: Any
    ) -> None:
        uploaded = service.upload(b"A. B. C.", "doc.txt")

        result = service.translate(uploaded.document_id, "es")

        assert uppercase_provider.calls == [("A. B. C", "en", "es")]
        assert result.status is DocumentStatus.COMPLETED
        assert result.target_language == "es"
        assert result.translated_length == len("A. B. C")
        download = service.download(uploaded.document_id, "translated", "es")
        assert download.content.decode("utf-8") == "A. B. C"

    def test_completed_record(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello world.", "doc.txt")
        service.translate(uploaded.document_id, "fr")

        record = service.status(uploaded.document_id)
        assert record["status"] == "completed"
        assert record["sourceLanguage"] == "auto"
        assert record["targetLanguage"] == "fr"
        assert record["translationTime"].endswith("Z")
        assert record["fileName"] == "doc.txt"
        assert record["textLength"] == 12

    def test_explicit_source_language_is_passed_through(
        self, service: DocumentService, uppercase_provider: Any
    ) -> None:
        uploaded = service.upload(b"Bonjour.", "doc.txt")
        service.translate(uploaded.document_id, "en", "fr")

        assert uppercase_provider.calls == [("Bonjour", "fr", "en")]
        assert service.status(uploaded.document_id)["sourceLanguage"] == "fr"

    def test_missing_arguments(self, service: DocumentService) -> None:
        with pytest.raises(ValidationError, match="Document ID and target language are required"):
            service.translate("doc-1", None)
        with pytest.raises(ValidationError, match="Document ID and target language are required"):
            service.translate("", "es")

    def test_unknown_document(self, service: DocumentService) -> None:
        with pytest.raises(NotFoundError, match="Document not found"):
            service.translate("does-not-exist", "es")

    def test_missing_extracted_text(
        self,
        service: DocumentService,
        document_store: InMemoryDocumentStore,
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        document_store._blobs.pop(keys.text_key(uploaded.document_id))

        with pytest.raises(NotFoundError, match="Document text not found"):
            service.translate(uploaded.document_id, "es")
        record = metadata_store.get(uploaded.document_id)
        assert record is not None
        assert record["status"] == "uploaded"

    def test_multiple_chunks_are_translated_in_order(
        self,
        make_service: Callable[..., DocumentService],
        uppercase_provider: Any,
    ) -> None:
        service = make_service(uppercase_provider, chunk_max_length=10)
        uploaded = service.upload(b"aaaa. bbbb. cccc", "doc.txt")

        service.translate(uploaded.document_id, "es")

        assert [call[0] for call in uppercase_provider.calls] == ["aaaa. bbbb", "cccc"]
        translated = service.download(uploaded.document_id, "translated", "es").content
        assert translated.decode("utf-8") == "AAAA. BBBB\n\nCCCC"

    def test_failed_chunks_fall_back_to_source_text(
        self,
        make_service: Callable[..., DocumentService],
        failing_provider_cls: type,
    ) -> None:
        service = make_service(failing_provider_cls(), chunk_max_length=10)
        uploaded = service.upload(b"aaaa. bbbb. cccc", "doc.txt")
        text = service.download(uploaded.document_id, "text").content.decode("utf-8")

        result = service.translate(uploaded.document_id, "es")

        translated = service.download(uploaded.document_id, "translated", "es").content
        assert translated.decode("utf-8") == "\n\n".join(chunk_text(text, 10))
        assert result.status is DocumentStatus.COMPLETED

    def test_partial_failure_keeps_other_translations(
        self,
        make_service: Callable[..., DocumentService],
        failing_provider_cls: type,
    ) -> None:
        provider = failing_provider_cls(fail_on={"cccc"})
        service = make_service(provider, chunk_max_length=10)
        uploaded = service.upload(b"aaaa. bbbb. cccc", "doc.txt")

        service.translate(uploaded.document_id, "es")

        translated = service.download(uploaded.document_id, "translated", "es").content
        assert translated.decode("utf-8") == "AAAA. BBBB\n\ncccc"
        assert provider.calls == ["aaaa. bbbb", "cccc"]

    def test_status_is_translating_while_provider_runs(
        self,
        make_service: Callable[..., DocumentService],
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        provider = StatusRecordingProvider(metadata_store)
        service = make_service(provider)
        uploaded = service.upload(b"Hello.", "doc.txt")

        service.translate(uploaded.document_id, "es")

        assert provider.seen_statuses == ["translating"]

    def test_retranslation_never_moves_status_back(
        self,
        make_service: Callable[..., DocumentService],
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        provider = StatusRecordingProvider(metadata_store)
        service = make_service(provider)
        uploaded = service.upload(b"Hello.", "doc.txt")
        service.translate(uploaded.document_id, "es")

        service.translate(uploaded.document_id, "de")

        assert provider.seen_statuses == ["translating", "completed"]
        record = service.status(uploaded.document_id)
        assert record["status"] == "completed"
        assert record["targetLanguage"] == "de"

    def test_translations_per_language_coexist(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        service.translate(uploaded.document_id, "es")
        service.translate(uploaded.document_id, "de")

        assert service.download(uploaded.document_id, "translated", "es").content == b"HELLO"
        assert service.download(uploaded.document_id, "translated", "de").content == b"HELLO"

    def test_unexpected_provider_error_leaves_document_translating(
        self,
        make_service: Callable[..., DocumentService],
        metadata_store: InMemoryMetadataStore,
    ) -> None:
        provider = MagicMock(spec=BaseTranslationProvider)
        provider.translate.side_effect = RuntimeError("bug in adapter")
        service = make_service(provider)
        uploaded = service.upload(b"Hello.", "doc.txt")

        with pytest.raises(RuntimeError, match="bug in adapter"):
            service.translate(uploaded.document_id, "es")
        record = metadata_store.get(uploaded.document_id)
        assert record is not None
        assert record["status"] == "translating"

    def test_empty_text_translates_to_empty_artifact(
        self, service: DocumentService, uppercase_provider: Any
    ) -> None:
        uploaded = service.upload(b"   ", "blank.txt")

        result = service.translate(uploaded.document_id, "es")

        assert uppercase_provider.calls == []
        assert result.translated_length == 0
        assert service.download(uploaded.document_id, "translated", "es").content == b""


class TestDownload:
    def test_translated_before_translate(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        with pytest.raises(NotFoundError, match="File not found"):
            service.download(uploaded.document_id, "translated", "es")

    def test_original_keeps_name_and_content_type(
        self, service: DocumentService, sample_pdf_bytes: bytes
    ) -> None:
        uploaded = service.upload(sample_pdf_bytes, "report.pdf")

        result = service.download(uploaded.document_id, "original")

        assert result.content == sample_pdf_bytes
        assert result.content_type == "application/pdf"
        assert result.filename == "original_report.pdf"

    def test_extracted_text(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello world.", "notes.v2.txt")

        result = service.download(uploaded.document_id, "text")

        assert result.content == b"Hello world."
        assert result.content_type == "text/plain"
        assert result.filename == "extracted_notes.v2.txt"

    def test_translated_filename_includes_language(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        service.translate(uploaded.document_id, "es")

        result = service.download(uploaded.document_id, "translated", "es")

        assert result.content_type == "text/plain"
        assert result.filename == "translated_es_doc.txt"

    def test_defaults_to_english_translation(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hola.", "doc.txt")
        service.translate(uploaded.document_id, "en", "es")

        result = service.download(uploaded.document_id, None, None)

        assert result.content == b"HOLA"
        assert result.filename == "translated_en_doc.txt"

    def test_missing_document_id(self, service: DocumentService) -> None:
        with pytest.raises(ValidationError, match="Document ID is required"):
            service.download(None)

    def test_unknown_type(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        with pytest.raises(ValidationError, match="Unsupported download type"):
            service.download(uploaded.document_id, "thumbnail")

    def test_rejects_path_like_language(self, service: DocumentService) -> None:
        uploaded = service.upload(b"Hello.", "doc.txt")
        with pytest.raises(ValidationError, match="Invalid language code"):
            service.download(uploaded.document_id, "translated", "x/../text")

    def test_unknown_document(self, service: DocumentService) -> None:
        with pytest.raises(NotFoundError, match="Document not found"):
            service.download("does-not-exist", "text")


class TestStatus:
    def test_missing_document_id(self, service: DocumentService) -> None:
        with pytest.raises(ValidationError, match="Document ID is required"):
            service.status("")

    def test_unknown_document(self, service: DocumentService) -> None:
        with pytest.raises(NotFoundError, match="Document not found"):
            service.status("does-not-exist")


class TestBuildDocumentService:
    def test_builds_from_settings(self) -> None:
        settings = Settings(
            storage_backend="memory",
            metadata_backend="memory",
            translation_provider="example",
        )
        service = build_document_service(settings)

        uploaded = service.upload(b"Hello.", "doc.txt")
        service.translate(uploaded.document_id, "es")
        assert service.download(uploaded.document_id, "translated", "es").content == b"Hello"
