"""Google Sheets integration against a mocked Sheets v4 service."""

from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from crm.api import deps
from crm.core.config import settings
from crm.core.exceptions import SheetsError
from crm.main import app
from crm.services.leads import LeadService
from crm.services.sheets import INTERACTIONS_HEADER, SheetsClient, build_sheets_client

API = settings.API_V1_STR
SPREADSHEET_ID = "sheet-123"


def http_error(status=500):
    return HttpError(MagicMock(status=status, reason="boom"), b'{"error": {"message": "boom"}}')


@pytest.fixture()
def service():
    return MagicMock()


@pytest.fixture()
def sheets(service):
    return SheetsClient(service, SPREADSHEET_ID)


@pytest.fixture()
def sheets_api(client, sheets):
    app.dependency_overrides[deps.get_sheets_client] = lambda: sheets
    return client


class TestSheetsClient:

    def test_create_appends_row(self, sheets, service):
        sheets.create_lead("Ada", "ada@example.com")

        service.spreadsheets().values().append.assert_called_once_with(
            spreadsheetId=SPREADSHEET_ID,
            range="Leads",
            valueInputOption="USER_ENTERED",
            body={"values": [["Ada", "ada@example.com"]]},
        )

    def test_update_targets_row(self, sheets, service):
        sheets.update_lead(5, "Ada", "ada@new.example.com")

        kwargs = service.spreadsheets().values().update.call_args.kwargs
        assert kwargs["range"] == "Leads!A5:B5"
        assert kwargs["body"] == {"values": [["Ada", "ada@new.example.com"]]}

    def test_delete_clears_row(self, sheets, service):
        sheets.delete_lead(3)

        service.spreadsheets().values().clear.assert_called_once_with(
            spreadsheetId=SPREADSHEET_ID, range="Leads!A3:B3",
        )

    def test_api_error_becomes_sheets_error(self, sheets, service):
        service.spreadsheets().values().append.return_value.execute.side_effect = http_error()

        with pytest.raises(SheetsError):
            sheets.create_lead("Ada", "ada@example.com")

    def test_sync_inserts_only_unknown_emails(self, sheets, service, store):
        LeadService(store).create({"name": "Known", "email": "known@example.com"})
        service.spreadsheets().values().get.return_value.execute.return_value = {
            "values": [
                ["Known Again", "KNOWN@example.com"],
                ["New Person", "new@example.com"],
                ["No Email"],
                [],
                ["Duplicate", "new@example.com"],
            ],
        }

        inserted = sheets.sync_leads(store)

        assert inserted == 1
        leads = {lead["email"]: lead for lead in LeadService(store).list()}
        assert set(leads) == {"known@example.com", "new@example.com"}
        assert leads["new@example.com"]["source"] == "Google Sheets"
        assert leads["new@example.com"]["status"] == "New"
        assert leads["new@example.com"]["visible_id"] == "L-0002"

    def test_sync_with_empty_sheet(self, sheets, service, store):
        service.spreadsheets().values().get.return_value.execute.return_value = {}

        assert sheets.sync_leads(store) == 0

    def test_interactions_sheet_created_with_header(self, sheets, service):
        service.spreadsheets().get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "Leads"}}],
        }

        assert sheets.ensure_interactions_sheet() is True

        body = service.spreadsheets().batchUpdate.call_args.kwargs["body"]
        assert body == {"requests": [{"addSheet": {"properties": {"title": "Interactions"}}}]}
        header = service.spreadsheets().values().update.call_args.kwargs
        assert header["range"] == "Interactions!A1:E1"
        assert header["body"] == {"values": [INTERACTIONS_HEADER]}

    def test_existing_interactions_sheet_is_left_alone(self, sheets, service):
        service.spreadsheets().get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "Interactions"}}],
        }

        assert sheets.ensure_interactions_sheet() is False
        service.spreadsheets().batchUpdate.assert_not_called()

    def test_unconfigured_client_raises(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_SHEETS_SPREADSHEET_ID", None)

        with pytest.raises(SheetsError):
            build_sheets_client()


class TestSheetsEndpoints:

    def test_create_lead(self, sheets_api, user_headers, service):
        response = sheets_api.post(
            f"{API}/sheets/leads", json={"name": "Ada", "email": "ada@example.com"}, headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        service.spreadsheets().values().append.assert_called_once()

    def test_failed_create_reports_generic_message(self, sheets_api, user_headers, service):
        service.spreadsheets().values().append.return_value.execute.side_effect = http_error()

        response = sheets_api.post(
            f"{API}/sheets/leads", json={"name": "Ada", "email": "ada@example.com"}, headers=user_headers,
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Unable to create lead in Google Sheet."

    def test_update_and_delete_rows(self, sheets_api, user_headers, service):
        updated = sheets_api.put(f"{API}/sheets/leads/4", json={"name": "Ada"}, headers=user_headers)
        deleted = sheets_api.delete(f"{API}/sheets/leads/4", headers=user_headers)

        assert updated.status_code == 200
        assert deleted.status_code == 200
        assert service.spreadsheets().values().update.call_args.kwargs["body"] == {"values": [["Ada", None]]}

    def test_header_row_cannot_be_targeted(self, sheets_api, user_headers):
        response = sheets_api.delete(f"{API}/sheets/leads/1", headers=user_headers)

        assert response.status_code == 422

    def test_sync_is_admin_only(self, sheets_api, user_headers, admin_headers, service):
        service.spreadsheets().values().get.return_value.execute.return_value = {
            "values": [["Ada", "ada@example.com"]],
        }

        assert sheets_api.post(f"{API}/sheets/sync", headers=user_headers).status_code == 403
        response = sheets_api.post(f"{API}/sheets/sync", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"inserted": 1}
        leads = sheets_api.get(f"{API}/leads", headers=admin_headers).json()
        assert [lead["email"] for lead in leads] == ["ada@example.com"]

    def test_sync_failure(self, sheets_api, admin_headers, service):
        service.spreadsheets().values().get.return_value.execute.side_effect = http_error()

        response = sheets_api.post(f"{API}/sheets/sync", headers=admin_headers)

        assert response.status_code == 500
        assert response.json()["detail"] == "Synchronization failed"

    def test_interactions_endpoint(self, sheets_api, admin_headers, service):
        service.spreadsheets().get.return_value.execute.return_value = {"sheets": []}

        response = sheets_api.post(f"{API}/sheets/interactions", headers=admin_headers)

        assert response.json() == {"created": True, "sheet_name": "Interactions"}

    def test_unconfigured_integration_is_503(self, client, user_headers, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_SHEETS_SPREADSHEET_ID", None)

        response = client.post(
            f"{API}/sheets/leads", json={"name": "Ada", "email": "ada@example.com"}, headers=user_headers,
        )

        assert response.status_code == 503
