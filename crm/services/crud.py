"""
CRUD Service Module

Generic create/read/update/delete over one collection of the document store.
Collections that show a human-friendly number (L-0001, E-0001, ...) pass a
prefix; those records also receive a random uuid on creation.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from crm.core.exceptions import DocumentNotFound
from crm.db.store import DocumentStore

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def generate_visible_id(store: DocumentStore, prefix: str, collection: str) -> str:
    """Number the next record after the current collection size, e.g. L-0007."""
    count = store.count(collection)
    return f"{prefix}-{count + 1:04d}"


class CollectionService:
    """
    Record-level operations for a single named collection.

    Attributes:
        store: The document store to read from and write to
        collection: Collection name (e.g., "leads")
        prefix: Visible id prefix; None disables uuid/visible_id generation
        order_by: Body field used to sort list() results
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        prefix: Optional[str] = None,
        order_by: Optional[str] = None,
    ):
        self.store = store
        self.collection = collection
        self.prefix = prefix
        self.order_by = order_by

    def list(self) -> List[Record]:
        return self.store.list_all(self.collection, order_by=self.order_by)

    def get(self, doc_id: str) -> Record:
        record = self.store.get(self.collection, doc_id)
        if record is None:
            raise DocumentNotFound(self.collection, doc_id)
        return record

    def create(self, data: Record) -> Record:
        data = dict(data)
        if self.prefix:
            data["uuid"] = str(uuid.uuid4())
            data["visible_id"] = generate_visible_id(self.store, self.prefix, self.collection)
        record = self.store.add(self.collection, data)
        logger.info("Created %s/%s", self.collection, record["id"])
        return record

    def update(self, doc_id: str, updates: Record) -> Record:
        # Identifiers are assigned once and never rewritten
        updates = {k: v for k, v in updates.items() if k not in ("id", "uuid", "visible_id")}
        return self.store.update(self.collection, doc_id, updates)

    def delete(self, doc_id: str) -> None:
        self.store.delete(self.collection, doc_id)
        logger.info("Deleted %s/%s", self.collection, doc_id)
