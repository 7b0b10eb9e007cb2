def original_key(document_id: str, extension: str) -> str:
    """Key of the uploaded bytes: documents/{id}/original.{ext}"""
    return f"documents/{document_id}/original.{extension}"


def text_key(document_id: str) -> str:
    """Key of the extracted text: documents/{id}/text.txt"""
    return f"documents/{document_id}/text.txt"


def translated_key(document_id: str, language: str) -> str:
    """Key of a translation: documents/{id}/translated_{language}.txt"""
    return f"documents/{document_id}/translated_{language}.txt"
