from typing import Annotated, Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response

from doc_translator.api.deps import get_document_service
from doc_translator.api.schemas import (
    ErrorResponse,
    TranslateRequest,
    TranslateResponse,
    UploadResponse,
)
from doc_translator.documents.service import DocumentService

router = APIRouter()

ServiceDep = Annotated[DocumentService, Depends(get_document_service)]

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def content_disposition(filename: str) -> str:
    """Attachment header; non latin-1 names also get an RFC 5987 filename*."""
    safe_name = filename.replace('"', "'")
    try:
        safe_name.encode("latin-1")
    except UnicodeEncodeError:
        fallback = safe_name.encode("ascii", "replace").decode("ascii")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return f'attachment; filename="{safe_name}"'


@router.post("/upload", response_model=UploadResponse, responses=_ERRORS)
def upload_document(
    service: ServiceDep,
    document: Annotated[UploadFile | None, File()] = None,
) -> dict[str, Any]:
    """Upload a .pdf, .txt, .docx or .doc file and extract its text."""
    if document is None:
        return service.upload(None, None).to_response()
    # one byte past the limit is enough for the service to reject the file
    content = document.file.read(service.max_file_size_bytes + 1)
    return service.upload(content, document.filename or "").to_response()


@router.post("/translate", response_model=TranslateResponse, responses=_ERRORS)
def translate_document(body: TranslateRequest, service: ServiceDep) -> dict[str, Any]:
    """Translate the extracted text of a document. Blocks until all chunks are done."""
    result = service.translate(
        body.documentId,
        body.targetLanguage,
        body.sourceLanguage,
    )
    return result.to_response()


@router.get("/download", responses=_ERRORS)
def download_artifact(
    service: ServiceDep,
    documentId: str | None = None,
    artifact_type: Annotated[str | None, Query(alias="type")] = None,
    language: str | None = None,
) -> Response:
    """Download the original file, the extracted text or a translation."""
    result = service.download(documentId, artifact_type, language)
    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={"Content-Disposition": content_disposition(result.filename)},
    )


@router.get("/status", responses=_ERRORS)
def document_status(service: ServiceDep, documentId: str | None = None) -> dict[str, Any]:
    """Return the stored metadata record of a document."""
    return service.status(documentId)
