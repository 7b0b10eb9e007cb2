from fastapi import Request

from doc_translator.documents.service import DocumentService


def get_document_service(request: Request) -> DocumentService:
    """Return the service built once at application startup."""
    service: DocumentService = request.app.state.document_service
    return service
