from pydantic import BaseModel


class TranslateRequest(BaseModel):
    """Body of POST /translate; required fields are checked by the service."""

    documentId: str | None = None
    targetLanguage: str | None = None
    sourceLanguage: str | None = None


class UploadResponse(BaseModel):
    documentId: str
    fileName: str
    status: str
    textLength: int
    message: str


class TranslateResponse(BaseModel):
    documentId: str
    status: str
    targetLanguage: str
    translatedLength: int
    message: str


class ErrorResponse(BaseModel):
    error: str
