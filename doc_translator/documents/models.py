import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class DocumentStatus(str, Enum):
    """Lifecycle of a document: uploaded -> translating -> completed."""

    UPLOADED = "uploaded"
    TRANSLATING = "translating"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def advance(self, target: "DocumentStatus") -> "DocumentStatus":
        """Return target if it is not behind the current status, else the current one."""
        return target if target.rank >= self.rank else self


_STATUS_ORDER = (DocumentStatus.UPLOADED, DocumentStatus.TRANSLATING, DocumentStatus.COMPLETED)


class ArtifactType(str, Enum):
    ORIGINAL = "original"
    TEXT = "text"
    TRANSLATED = "translated"


CONTENT_TYPES: dict[str, str] = {
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "doc": "application/msword",
    "pdf": "application/pdf",
    "txt": "text/plain",
}

TEXT_CONTENT_TYPE = "text/plain"


def content_type_for(extension: str) -> str:
    return CONTENT_TYPES.get(extension, "application/octet-stream")


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2026-01-01T10:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


_EXTENSION_RE = re.compile(r"\.[^/.]+$")

_RECORD_KEYS: dict[str, str] = {
    "document_id": "documentId",
    "file_name": "fileName",
    "file_extension": "fileExtension",
    "file_size": "fileSize",
    "upload_time": "uploadTime",
    "status": "status",
    "text_length": "textLength",
    "source_language": "sourceLanguage",
    "target_language": "targetLanguage",
    "translation_time": "translationTime",
}


@dataclass
class DocumentMetadata:
    """One metadata record per document, stored as JSON with camelCase keys."""

    document_id: str
    file_name: str
    file_extension: str
    file_size: int
    upload_time: str
    status: DocumentStatus
    text_length: int
    source_language: str | None = None
    target_language: str | None = None
    translation_time: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = dict(self.extra)
        for attr, key in _RECORD_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            record[key] = value.value if isinstance(value, DocumentStatus) else value
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "DocumentMetadata":
        values = {attr: record.get(key) for attr, key in _RECORD_KEYS.items()}
        values["status"] = DocumentStatus(values["status"])
        extra = {k: v for k, v in record.items() if k not in _RECORD_KEYS.values()}
        return cls(**values, extra=extra)

    @property
    def file_stem(self) -> str:
        """File name without its last extension."""
        return _EXTENSION_RE.sub("", self.file_name)


@dataclass(frozen=True)
class UploadResult:
    document_id: str
    file_name: str
    status: DocumentStatus
    text_length: int
    message: str = "Document uploaded and processed successfully"

    def to_response(self) -> dict[str, Any]:
        return {
            "documentId": self.document_id,
            "fileName": self.file_name,
            "status": self.status.value,
            "textLength": self.text_length,
            "message": self.message,
        }


@dataclass(frozen=True)
class TranslationResult:
    document_id: str
    status: DocumentStatus
    target_language: str
    translated_length: int
    message: str = "Translation completed successfully"

    def to_response(self) -> dict[str, Any]:
        return {
            "documentId": self.document_id,
            "status": self.status.value,
            "targetLanguage": self.target_language,
            "translatedLength": self.translated_length,
            "message": self.message,
        }


@dataclass(frozen=True)
class DownloadResult:
    content: bytes
    content_type: str
    filename: str
