"""
Google Sheets Endpoints Module

Row-level lead mirroring into the configured spreadsheet, a one-way pull of
new sheet leads into the store, and creation of the interactions sheet.
Upstream failures are reported as a flat 500 message; details go to the log.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Path
from crm.api import deps
from crm.core.exceptions import SheetsError
from crm.db.store import DocumentStore
from crm.schemas.session import SessionUser
from crm.schemas.sheets import (
    InteractionsSheetResult,
    SheetLead,
    SheetLeadUpdate,
    SheetResult,
    SyncResult,
)
from crm.services.sheets import SheetsClient

router = APIRouter()

# Row 1 is the header
RowNumber = Annotated[int, Path(ge=2, description="Spreadsheet row of the lead")]


@router.post("/leads", response_model=SheetResult)
def create_sheet_lead(
    lead_in: SheetLead,
    sheets: SheetsClient = Depends(deps.get_sheets_client),
    current_user: SessionUser = Depends(deps.get_current_user),
):
    try:
        sheets.create_lead(lead_in.name, lead_in.email)
    except SheetsError:
        raise HTTPException(status_code=500, detail="Unable to create lead in Google Sheet.")
    return SheetResult(success=True)


@router.put("/leads/{row}", response_model=SheetResult)
def update_sheet_lead(
    row: RowNumber,
    lead_in: SheetLeadUpdate,
    sheets: SheetsClient = Depends(deps.get_sheets_client),
    current_user: SessionUser = Depends(deps.get_current_user),
):
    try:
        sheets.update_lead(row, lead_in.name, lead_in.email)
    except SheetsError:
        raise HTTPException(status_code=500, detail="Unable to update lead in Google Sheet.")
    return SheetResult(success=True)


@router.delete("/leads/{row}", response_model=SheetResult)
def delete_sheet_lead(
    row: RowNumber,
    sheets: SheetsClient = Depends(deps.get_sheets_client),
    current_user: SessionUser = Depends(deps.get_current_user),
):
    try:
        sheets.delete_lead(row)
    except SheetsError:
        raise HTTPException(status_code=500, detail="Unable to delete lead from Google Sheet.")
    return SheetResult(success=True)


@router.post("/sync", response_model=SyncResult)
def sync_sheet_leads(
    store: DocumentStore = Depends(deps.get_store),
    sheets: SheetsClient = Depends(deps.get_sheets_client),
    current_user: SessionUser = Depends(deps.get_current_admin),
):
    """
    Insert leads from the sheet whose email is not yet in the store.
    """
    try:
        inserted = sheets.sync_leads(store)
    except SheetsError:
        raise HTTPException(status_code=500, detail="Synchronization failed")
    return SyncResult(inserted=inserted)


@router.post("/interactions", response_model=InteractionsSheetResult)
def create_interactions_sheet(
    sheets: SheetsClient = Depends(deps.get_sheets_client),
    current_user: SessionUser = Depends(deps.get_current_admin),
):
    try:
        created = sheets.ensure_interactions_sheet()
    except SheetsError:
        raise HTTPException(status_code=500, detail="Failed to create interaction sheet")
    return InteractionsSheetResult(created=created, sheet_name=sheets.interactions_sheet)
