from doc_translator.chunking.chunker import chunk_text
from doc_translator.documents.exceptions import NotFoundError
from doc_translator.documents.models import DocumentMetadata, DocumentStatus, utc_now_iso
from doc_translator.documents.pipeline import PipelineStep, TranslationContext, UploadContext
from doc_translator.extraction.extractor import TextExtractor
from doc_translator.logging.logger import Log
from doc_translator.metadata.base import BaseMetadataStore
from doc_translator.storage import keys
from doc_translator.storage.base import BaseDocumentStore
from doc_translator.translation.base import BaseTranslationProvider
from doc_translator.translation.exceptions import TranslationError

TRANSLATION_SEPARATOR = "\n\n"


class StoreOriginalStep(PipelineStep[UploadContext]):
    def __init__(self, document_store: BaseDocumentStore) -> None:
        self._document_store = document_store

    def run(self, context: UploadContext) -> UploadContext:
        key = keys.original_key(context.document_id, context.file_extension)
        self._document_store.put(key, context.content)
        Log.info(
            f"Stored {len(context.content)} bytes of original file",
            document_id=context.document_id,
        )
        return context


class ExtractTextStep(PipelineStep[UploadContext]):
    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: UploadContext) -> UploadContext:
        context.extracted_text = self._text_extractor.extract(
            context.content,
            context.file_extension,
            context.file_name,
        )
        Log.info(
            f"Extracted {len(context.extracted_text)} chars",
            document_id=context.document_id,
        )
        return context


class StoreExtractedTextStep(PipelineStep[UploadContext]):
    def __init__(self, document_store: BaseDocumentStore) -> None:
        self._document_store = document_store

    def run(self, context: UploadContext) -> UploadContext:
        self._document_store.put_text(keys.text_key(context.document_id), context.extracted_text)
        return context


class CreateMetadataStep(PipelineStep[UploadContext]):
    def __init__(self, metadata_store: BaseMetadataStore) -> None:
        self._metadata_store = metadata_store

    def run(self, context: UploadContext) -> UploadContext:
        metadata = DocumentMetadata(
            document_id=context.document_id,
            file_name=context.file_name,
            file_extension=context.file_extension,
            file_size=len(context.content),
            upload_time=context.upload_time,
            status=DocumentStatus.UPLOADED,
            text_length=len(context.extracted_text),
        )
        self._metadata_store.put(context.document_id, metadata.to_record())
        context.metadata = metadata
        return context


class LoadMetadataStep(PipelineStep[TranslationContext]):
    def __init__(self, metadata_store: BaseMetadataStore) -> None:
        self._metadata_store = metadata_store

    def run(self, context: TranslationContext) -> TranslationContext:
        record = self._metadata_store.get(context.document_id)
        if record is None:
            raise NotFoundError("Document not found")
        context.metadata = DocumentMetadata.from_record(record)
        return context


class LoadExtractedTextStep(PipelineStep[TranslationContext]):
    def __init__(self, document_store: BaseDocumentStore) -> None:
        self._document_store = document_store

    def run(self, context: TranslationContext) -> TranslationContext:
        text = self._document_store.get_text(keys.text_key(context.document_id))
        if text is None:
            raise NotFoundError("Document text not found")
        context.text = text
        return context


class MarkTranslatingStep(PipelineStep[TranslationContext]):
    def __init__(self, metadata_store: BaseMetadataStore) -> None:
        self._metadata_store = metadata_store

    def run(self, context: TranslationContext) -> TranslationContext:
        if context.metadata is None:
            raise ValueError("TranslationContext.metadata must be loaded before marking")
        metadata = context.metadata
        metadata.status = metadata.status.advance(DocumentStatus.TRANSLATING)
        metadata.source_language = context.source_language
        metadata.target_language = context.target_language
        self._metadata_store.put(context.document_id, metadata.to_record())
        Log.info(
            f"Translation to '{context.target_language}' started, status {metadata.status.value}",
            document_id=context.document_id,
        )
        return context


class ChunkTextStep(PipelineStep[TranslationContext]):
    def __init__(self, max_length: int) -> None:
        self._max_length = max_length

    def run(self, context: TranslationContext) -> TranslationContext:
        context.chunks = chunk_text(context.text, self._max_length)
        Log.info(
            f"Split {len(context.text)} chars into {len(context.chunks)} chunks",
            document_id=context.document_id,
        )
        return context


class TranslateChunksStep(PipelineStep[TranslationContext]):
    """Translates chunks one at a time, in order.

    A chunk the provider fails on is kept untranslated; the request goes on.
    """

    def __init__(self, translation_provider: BaseTranslationProvider) -> None:
        self._translation_provider = translation_provider

    def run(self, context: TranslationContext) -> TranslationContext:
        translated: list[str] = []
        failed = 0
        for index, chunk in enumerate(context.chunks):
            try:
                translated.append(
                    self._translation_provider.translate(
                        chunk,
                        source_language=context.provider_source_language,
                        target_language=context.target_language,
                    )
                )
            except TranslationError as exc:
                failed += 1
                Log.warning(
                    f"Chunk {index} kept untranslated: {exc}",
                    document_id=context.document_id,
                )
                translated.append(chunk)
        context.translated_chunks = translated
        context.failed_chunks = failed
        context.translated_text = TRANSLATION_SEPARATOR.join(translated)
        return context


class StoreTranslationStep(PipelineStep[TranslationContext]):
    def __init__(self, document_store: BaseDocumentStore) -> None:
        self._document_store = document_store

    def run(self, context: TranslationContext) -> TranslationContext:
        key = keys.translated_key(context.document_id, context.target_language)
        self._document_store.put_text(key, context.translated_text)
        return context


class MarkCompletedStep(PipelineStep[TranslationContext]):
    def __init__(self, metadata_store: BaseMetadataStore) -> None:
        self._metadata_store = metadata_store

    def run(self, context: TranslationContext) -> TranslationContext:
        if context.metadata is None:
            raise ValueError("TranslationContext.metadata must be loaded before marking")
        metadata = context.metadata
        metadata.status = metadata.status.advance(DocumentStatus.COMPLETED)
        metadata.translation_time = utc_now_iso()
        self._metadata_store.put(context.document_id, metadata.to_record())
        Log.info(
            f"Translation to '{context.target_language}' completed: "
            f"{len(context.chunks)} chunks, {context.failed_chunks} kept untranslated",
            document_id=context.document_id,
        )
        return context
