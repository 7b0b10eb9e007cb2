from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from doc_translator.documents.models import DocumentMetadata
from doc_translator.logging.logger import Log


@dataclass(slots=True)
class UploadContext:
    document_id: str
    file_name: str
    file_extension: str
    content: bytes
    upload_time: str
    extracted_text: str = ""
    metadata: DocumentMetadata | None = None


@dataclass(slots=True)
class TranslationContext:
    document_id: str
    target_language: str
    source_language: str
    provider_source_language: str
    metadata: DocumentMetadata | None = None
    text: str = ""
    chunks: list[str] = field(default_factory=list)
    translated_chunks: list[str] = field(default_factory=list)
    failed_chunks: int = 0
    translated_text: str = ""


ContextT = TypeVar("ContextT", UploadContext, TranslationContext)


class PipelineStep(ABC, Generic[ContextT]):
    @abstractmethod
    def run(self, context: ContextT) -> ContextT:
        raise NotImplementedError


class Pipeline(Generic[ContextT]):
    """Runs steps in order; the first exception aborts the remaining steps."""

    def __init__(self, name: str, steps: Sequence[PipelineStep[ContextT]]) -> None:
        self._name = name
        self._steps = list(steps)

    @property
    def steps(self) -> list[PipelineStep[ContextT]]:
        return list(self._steps)

    def run(self, context: ContextT) -> ContextT:
        for step in self._steps:
            Log.debug(
                f"{self._name}: running {type(step).__name__}",
                document_id=context.document_id,
            )
            context = step.run(context)
        return context
