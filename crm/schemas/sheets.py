from typing import Optional
from pydantic import BaseModel


class SheetLead(BaseModel):
    name: str
    email: str


class SheetLeadUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class SheetResult(BaseModel):
    success: bool = True
    detail: Optional[str] = None


class SyncResult(BaseModel):
    inserted: int


class InteractionsSheetResult(BaseModel):
    created: bool
    sheet_name: str
