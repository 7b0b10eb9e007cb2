"""Upload, translate, download and status operations over the injected stores."""

import re
import uuid
from typing import Any

from doc_translator.chunking.chunker import DEFAULT_MAX_LENGTH
from doc_translator.config.settings import Settings
from doc_translator.documents.exceptions import NotFoundError, ValidationError
from doc_translator.documents.locks import DocumentLocks
from doc_translator.documents.models import (
    TEXT_CONTENT_TYPE,
    ArtifactType,
    DocumentMetadata,
    DownloadResult,
    TranslationResult,
    UploadResult,
    content_type_for,
    utc_now_iso,
)
from doc_translator.documents.pipeline import Pipeline, TranslationContext, UploadContext
from doc_translator.documents.steps import (
    ChunkTextStep,
    CreateMetadataStep,
    ExtractTextStep,
    LoadExtractedTextStep,
    LoadMetadataStep,
    MarkCompletedStep,
    MarkTranslatingStep,
    StoreExtractedTextStep,
    StoreOriginalStep,
    StoreTranslationStep,
    TranslateChunksStep,
)
from doc_translator.extraction.extractor import SUPPORTED_EXTENSIONS, TextExtractor
from doc_translator.logging.logger import Log
from doc_translator.metadata.base import BaseMetadataStore
from doc_translator.metadata.factory import MetadataStoreFactory
from doc_translator.pdf.factory import PdfExtractorFactory
from doc_translator.storage import keys
from doc_translator.storage.base import BaseDocumentStore
from doc_translator.storage.exceptions import StorageError
from doc_translator.storage.factory import DocumentStoreFactory
from doc_translator.translation.base import BaseTranslationProvider
from doc_translator.translation.factory import TranslationProviderFactory

AUTO_LANGUAGE = "auto"
DEFAULT_SOURCE_LANGUAGE = "en"
DEFAULT_DOWNLOAD_LANGUAGE = "en"
DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

_LANGUAGE_CODE_RE = re.compile(r"[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*")


def file_extension_of(file_name: str) -> str:
    """Last dot-separated segment, lowercased; a name without dots is its own extension."""
    return file_name.rsplit(".", 1)[-1].lower()


def require_language_code(language: str) -> str:
    """Return language if it looks like a language tag (es, pt-BR, zh_Hans).

    Language codes end up in artifact keys, so anything else is rejected.

    Raises:
        ValidationError: if language is not a language tag.
    """
    if not _LANGUAGE_CODE_RE.fullmatch(language):
        raise ValidationError(f"Invalid language code '{language}'")
    return language


class DocumentService:
    """Owns the uploaded -> translating -> completed lifecycle of each document.

    Upload: validate -> store original -> extract -> store text -> metadata.
    Translate: load metadata/text -> mark translating -> chunk -> translate
    -> store translation -> mark completed.
    """

    def __init__(
        self,
        *,
        document_store: BaseDocumentStore,
        metadata_store: BaseMetadataStore,
        text_extractor: TextExtractor,
        translation_provider: BaseTranslationProvider,
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
        chunk_max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self._document_store = document_store
        self._metadata_store = metadata_store
        self._max_file_size_bytes = max_file_size_bytes
        self._locks = DocumentLocks()
        self._upload_pipeline: Pipeline[UploadContext] = Pipeline(
            "upload",
            [
                StoreOriginalStep(document_store),
                ExtractTextStep(text_extractor),
                StoreExtractedTextStep(document_store),
                CreateMetadataStep(metadata_store),
            ],
        )
        self._translation_pipeline: Pipeline[TranslationContext] = Pipeline(
            "translate",
            [
                LoadMetadataStep(metadata_store),
                LoadExtractedTextStep(document_store),
                MarkTranslatingStep(metadata_store),
                ChunkTextStep(chunk_max_length),
                TranslateChunksStep(translation_provider),
                StoreTranslationStep(document_store),
                MarkCompletedStep(metadata_store),
            ],
        )

    def upload(self, content: bytes | None, file_name: str | None) -> UploadResult:
        """Store a new document and its extracted text.

        Raises:
            ValidationError: no file, file too large or unsupported extension.
            StorageError: if a store write fails.
        """
        if content is None or file_name is None:
            raise ValidationError("No document provided")
        if len(content) > self._max_file_size_bytes:
            raise ValidationError("File too large")
        extension = file_extension_of(file_name)
        if extension not in SUPPORTED_EXTENSIONS:
            raise ValidationError(
                "Unsupported file type. Please upload .docx, .doc, .pdf, or .txt files"
            )

        context = UploadContext(
            document_id=str(uuid.uuid4()),
            file_name=file_name,
            file_extension=extension,
            content=content,
            upload_time=utc_now_iso(),
        )
        Log.info(f"Uploading '{file_name}'", document_id=context.document_id)
        try:
            context = self._upload_pipeline.run(context)
        except Exception:
            self._discard_upload(context)
            raise
        if context.metadata is None:
            raise RuntimeError("Upload pipeline finished without metadata")
        return UploadResult(
            document_id=context.document_id,
            file_name=file_name,
            status=context.metadata.status,
            text_length=context.metadata.text_length,
        )

    def translate(
        self,
        document_id: str | None,
        target_language: str | None,
        source_language: str | None = AUTO_LANGUAGE,
    ) -> TranslationResult:
        """Translate the extracted text of a document, synchronously.

        Raises:
            ValidationError: missing document id or target language, or a
                language that is not a language code.
            NotFoundError: unknown document or missing extracted text.
            StorageError: if a store read or write fails.
        """
        if not document_id or not target_language:
            raise ValidationError("Document ID and target language are required")
        require_language_code(target_language)
        source_language = source_language or AUTO_LANGUAGE
        if source_language != AUTO_LANGUAGE:
            require_language_code(source_language)
        provider_source = (
            DEFAULT_SOURCE_LANGUAGE if source_language == AUTO_LANGUAGE else source_language
        )

        context = TranslationContext(
            document_id=document_id,
            target_language=target_language,
            source_language=source_language,
            provider_source_language=provider_source,
        )
        with self._locks.hold(document_id):
            context = self._translation_pipeline.run(context)
        if context.metadata is None:
            raise RuntimeError("Translation pipeline finished without metadata")
        return TranslationResult(
            document_id=document_id,
            status=context.metadata.status,
            target_language=target_language,
            translated_length=len(context.translated_text),
        )

    def download(
        self,
        document_id: str | None,
        artifact_type: str | None = ArtifactType.TRANSLATED.value,
        language: str | None = DEFAULT_DOWNLOAD_LANGUAGE,
    ) -> DownloadResult:
        """Return one stored artifact with its content type and suggested filename.

        Raises:
            ValidationError: missing document id, unknown artifact type or
                invalid language code.
            NotFoundError: unknown document or missing artifact.
        """
        if not document_id:
            raise ValidationError("Document ID is required")
        try:
            kind = ArtifactType(artifact_type or ArtifactType.TRANSLATED.value)
        except ValueError:
            choices = ", ".join(t.value for t in ArtifactType)
            raise ValidationError(
                f"Unsupported download type '{artifact_type}'. Choose from: {choices}"
            ) from None
        language = require_language_code(language or DEFAULT_DOWNLOAD_LANGUAGE)

        metadata = self._load_metadata(document_id)
        if kind is ArtifactType.ORIGINAL:
            key = keys.original_key(document_id, metadata.file_extension)
            filename = f"original_{metadata.file_name}"
            content_type = content_type_for(metadata.file_extension)
        elif kind is ArtifactType.TRANSLATED:
            key = keys.translated_key(document_id, language)
            filename = f"translated_{language}_{metadata.file_stem}.txt"
            content_type = TEXT_CONTENT_TYPE
        else:
            key = keys.text_key(document_id)
            filename = f"extracted_{metadata.file_stem}.txt"
            content_type = TEXT_CONTENT_TYPE

        content = self._document_store.get(key)
        if content is None:
            raise NotFoundError("File not found")
        Log.info(f"Serving {kind.value} artifact", document_id=document_id, key=key)
        return DownloadResult(content=content, content_type=content_type, filename=filename)

    def status(self, document_id: str | None) -> dict[str, Any]:
        """Return the stored metadata record as-is.

        Raises:
            ValidationError: missing document id.
            NotFoundError: unknown document.
        """
        if not document_id:
            raise ValidationError("Document ID is required")
        record = self._metadata_store.get(document_id)
        if record is None:
            raise NotFoundError("Document not found")
        return record

    @property
    def max_file_size_bytes(self) -> int:
        return self._max_file_size_bytes

    def _discard_upload(self, context: UploadContext) -> None:
        """Remove the blobs of a failed upload; it never got a metadata record."""
        for key in (
            keys.original_key(context.document_id, context.file_extension),
            keys.text_key(context.document_id),
        ):
            try:
                self._document_store.delete(key)
            except StorageError as exc:
                Log.error("Failed to remove artifact of failed upload", key=key, error=exc)

    def _load_metadata(self, document_id: str) -> DocumentMetadata:
        record = self._metadata_store.get(document_id)
        if record is None:
            raise NotFoundError("Document not found")
        return DocumentMetadata.from_record(record)


def build_document_service(settings: Settings) -> DocumentService:
    """Build a DocumentService with the adapters selected in settings."""
    text_extractor = TextExtractor(pdf_extractor=PdfExtractorFactory.create(settings))
    return DocumentService(
        document_store=DocumentStoreFactory.create(settings),
        metadata_store=MetadataStoreFactory.create(settings),
        text_extractor=text_extractor,
        translation_provider=TranslationProviderFactory.create(settings),
        max_file_size_bytes=settings.max_file_size_bytes,
        chunk_max_length=settings.chunk_max_length,
    )
