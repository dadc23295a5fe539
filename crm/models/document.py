"""
Document Model Module

This module defines the single table backing the document store. Every
collection (leads, employees, user_profiles, ...) lives in the same table,
keyed by (collection, id), with the record body kept as a JSON object.
"""
from typing import Any, Dict, Optional
from sqlmodel import SQLModel, Field, JSON, Column
import uuid

from datetime import datetime


def new_document_id() -> str:
    return uuid.uuid4().hex


class Document(SQLModel, table=True):
    """
    A schemaless record inside a named collection.

    Attributes:
        collection: Name of the collection the document belongs to
        id: Document identifier, generated on add or chosen by the caller on set
        data: The record body (never contains the id itself)
        created_at: ISO timestamp when the document was first written
        updated_at: ISO timestamp of the last write
    """
    __tablename__ = "documents"

    # Composite primary key - ids are unique per collection only
    collection: str = Field(primary_key=True, index=True)
    id: str = Field(default_factory=new_document_id, primary_key=True)

    # Record body stored as a JSON object
    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    # Audit timestamps
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())

    def to_record(self) -> Dict[str, Any]:
        """Flatten into the shape callers see: the body plus its id."""
        return {"id": self.id, **(self.data or {})}
