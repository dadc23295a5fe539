from .document import Document, new_document_id

__all__ = [
    "Document", "new_document_id",
]
