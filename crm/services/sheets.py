"""
Google Sheets Service Module

Mirrors leads into a spreadsheet and pulls new ones back. Rows in the leads
sheet are `[name, email]`, with a header in row 1, so the first lead is row 2.
Every API failure surfaces as SheetsError; callers decide how to report it.
"""
import logging
from typing import Any, Dict, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from crm.core.config import settings
from crm.core.exceptions import SheetsError
from crm.db.store import DocumentStore
from crm.services.leads import LeadService

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
INTERACTIONS_HEADER = ["Interaction ID", "Lead ID", "Date", "Type", "Notes"]


def build_credentials(client_email: str, private_key: str) -> service_account.Credentials:
    # Keys pasted into .env usually carry literal "\n" sequences
    info = {
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": TOKEN_URI,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)


class SheetsClient:
    """
    Lead operations against one spreadsheet.

    Attributes:
        service: A Sheets v4 service resource (googleapiclient)
        spreadsheet_id: Target spreadsheet
        leads_sheet: Sheet (tab) holding the leads
        interactions_sheet: Sheet (tab) created on demand for interactions
    """

    def __init__(
        self,
        service: Any,
        spreadsheet_id: str,
        leads_sheet: str = "Leads",
        interactions_sheet: str = "Interactions",
    ):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.leads_sheet = leads_sheet
        self.interactions_sheet = interactions_sheet

    def _execute(self, request, action: str) -> Dict[str, Any]:
        try:
            return request.execute()
        except Exception as exc:
            logger.error("The API returned an error while trying to %s: %s", action, exc)
            raise SheetsError(f"Unable to {action}") from exc

    def _row_range(self, row: int) -> str:
        return f"{self.leads_sheet}!A{row}:B{row}"

    def create_lead(self, name: str, email: str) -> None:
        values = self.service.spreadsheets().values()
        self._execute(values.append(
            spreadsheetId=self.spreadsheet_id,
            range=self.leads_sheet,
            valueInputOption="USER_ENTERED",
            body={"values": [[name, email]]},
        ), "create lead")

    def update_lead(self, row: int, name: Optional[str], email: Optional[str]) -> None:
        values = self.service.spreadsheets().values()
        self._execute(values.update(
            spreadsheetId=self.spreadsheet_id,
            range=self._row_range(row),
            valueInputOption="USER_ENTERED",
            body={"values": [[name, email]]},
        ), "update lead")

    def delete_lead(self, row: int) -> None:
        # Clearing keeps the row numbers of the leads below stable
        values = self.service.spreadsheets().values()
        self._execute(values.clear(
            spreadsheetId=self.spreadsheet_id,
            range=self._row_range(row),
        ), "delete lead")

    def read_leads(self) -> List[Dict[str, str]]:
        values = self.service.spreadsheets().values()
        result = self._execute(values.get(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.leads_sheet}!A2:C",
        ), "read leads")
        leads = []
        for row in result.get("values", []):
            if not row:
                continue
            leads.append({
                "name": row[0],
                "email": row[1] if len(row) > 1 else "",
            })
        return leads

    def sync_leads(self, store: DocumentStore) -> int:
        """
        Copy sheet leads whose email is not yet in the store. Returns how many were inserted.
        """
        logger.info("Starting synchronization between Google Sheets and the document store...")
        lead_service = LeadService(store)
        known_emails = {
            (lead.get("email") or "").strip().lower()
            for lead in lead_service.list()
        }
        inserted = 0
        for lead in self.read_leads():
            email = (lead["email"] or "").strip().lower()
            # Without an email there is nothing to deduplicate on
            if not email or email in known_emails:
                continue
            lead_service.create({"name": lead["name"], "email": lead["email"], "status": "New", "source": "Google Sheets"})
            known_emails.add(email)
            inserted += 1

        if inserted:
            logger.info("Inserted %d new leads from Google Sheets.", inserted)
        else:
            logger.info("No new leads to insert.")
        return inserted

    def ensure_interactions_sheet(self) -> bool:
        """Create the interactions sheet with its header row. Returns False if it already existed."""
        spreadsheets = self.service.spreadsheets()
        info = self._execute(spreadsheets.get(spreadsheetId=self.spreadsheet_id), "read spreadsheet")
        titles = {
            sheet.get("properties", {}).get("title")
            for sheet in info.get("sheets", [])
        }
        if self.interactions_sheet in titles:
            logger.info('"%s" sheet already exists.', self.interactions_sheet)
            return False

        logger.info('Creating "%s" sheet...', self.interactions_sheet)
        self._execute(spreadsheets.batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": self.interactions_sheet}}}]},
        ), "create interactions sheet")
        self._execute(spreadsheets.values().update(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.interactions_sheet}!A1:E1",
            valueInputOption="USER_ENTERED",
            body={"values": [INTERACTIONS_HEADER]},
        ), "write interactions header")
        return True


def build_sheets_client() -> SheetsClient:
    """Build a client from settings. Raises SheetsError when the integration is not configured."""
    if not (settings.GOOGLE_SHEETS_SPREADSHEET_ID and settings.GOOGLE_SHEETS_CLIENT_ID and settings.GOOGLE_SHEETS_CLIENT_SECRET):
        raise SheetsError("Google Sheets integration is not configured")
    try:
        credentials = build_credentials(settings.GOOGLE_SHEETS_CLIENT_ID, settings.GOOGLE_SHEETS_CLIENT_SECRET)
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
    except ValueError as exc:
        logger.error("Invalid Google Sheets service account credentials: %s", exc)
        raise SheetsError("Google Sheets credentials are invalid") from exc
    return SheetsClient(
        service,
        settings.GOOGLE_SHEETS_SPREADSHEET_ID,
        leads_sheet=settings.LEADS_SHEET_NAME,
        interactions_sheet=settings.INTERACTIONS_SHEET_NAME,
    )
