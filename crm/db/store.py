"""
Document Store Module

Collection-level CRUD over the `documents` table. Records go in and come
out as plain dicts; the generated identifier is returned under "id" and is
never stored inside the body. Nothing here enforces a schema - callers
validate with Pydantic before writing.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select, func

from crm.core.exceptions import DocumentNotFound
from crm.models.document import Document

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _body(data: Record) -> Record:
    # The id lives in the key, not in the body
    return {k: v for k, v in data.items() if k != "id"}


class DocumentStore:
    """
    Thin wrapper around a database session exposing named collections.

    Every mutating call commits immediately, so a list issued right after a
    write always sees it.
    """

    def __init__(self, session: Session):
        self.session = session

    def _get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        return self.session.get(Document, (collection, doc_id))

    def list_all(self, collection: str, order_by: Optional[str] = None) -> List[Record]:
        """Return every record in the collection, optionally sorted by a body field."""
        statement = select(Document).where(Document.collection == collection).order_by(Document.created_at)
        records = [doc.to_record() for doc in self.session.exec(statement).all()]
        if order_by:
            # Records without the field sort last
            records.sort(key=lambda r: (r.get(order_by) is None, "" if r.get(order_by) is None else r[order_by]))
        return records

    def where(self, collection: str, field: str, value: Any) -> List[Record]:
        """Equality filter on a top-level body field."""
        return [r for r in self.list_all(collection) if r.get(field) == value]

    def get(self, collection: str, doc_id: str) -> Optional[Record]:
        doc = self._get_document(collection, doc_id)
        return doc.to_record() if doc else None

    def count(self, collection: str) -> int:
        statement = select(func.count()).select_from(Document).where(Document.collection == collection)
        return self.session.exec(statement).one()

    def add(self, collection: str, data: Record) -> Record:
        """Insert a new record under a generated id and return it."""
        doc = Document(collection=collection, data=_body(data))
        self.session.add(doc)
        self.session.commit()
        self.session.refresh(doc)
        logger.debug("Added %s/%s", collection, doc.id)
        return doc.to_record()

    def set(self, collection: str, doc_id: str, data: Record, merge: bool = False) -> Record:
        """
        Write a record under a caller-chosen id.

        With merge=False the body is replaced wholesale; with merge=True the
        given fields are merged into an existing body (creating it if absent).
        """
        doc = self._get_document(collection, doc_id)
        if doc is None:
            doc = Document(collection=collection, id=doc_id, data=_body(data))
        else:
            body = {**doc.data, **_body(data)} if merge else _body(data)
            # Assign a fresh dict so the JSON column is flagged dirty
            doc.data = body
            doc.updated_at = datetime.utcnow().isoformat()
        self.session.add(doc)
        self.session.commit()
        self.session.refresh(doc)
        return doc.to_record()

    def update(self, collection: str, doc_id: str, updates: Record) -> Record:
        """Merge fields into an existing record. Raises DocumentNotFound if absent."""
        doc = self._get_document(collection, doc_id)
        if doc is None:
            raise DocumentNotFound(collection, doc_id)
        doc.data = {**doc.data, **_body(updates)}
        doc.updated_at = datetime.utcnow().isoformat()
        self.session.add(doc)
        self.session.commit()
        self.session.refresh(doc)
        return doc.to_record()

    def delete(self, collection: str, doc_id: str) -> None:
        doc = self._get_document(collection, doc_id)
        if doc is None:
            raise DocumentNotFound(collection, doc_id)
        self.session.delete(doc)
        self.session.commit()
        logger.debug("Deleted %s/%s", collection, doc_id)
