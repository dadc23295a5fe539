"""
Domain exceptions raised below the HTTP layer.

Endpoints translate these into HTTPException responses; the session
bootstrap treats any of them as a reason to fall back to the default role.
"""


class CRMError(Exception):
    """Base class for all application errors."""


class DocumentNotFound(CRMError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


class ProfileNotFound(CRMError):
    def __init__(self, uid: str):
        super().__init__(f"No profile for uid {uid}")
        self.uid = uid


class InvalidCredentials(CRMError):
    """Raised when a token cannot be decoded or names an unknown account."""


class AccountExists(CRMError):
    def __init__(self, email: str):
        super().__init__(f"Account {email} already exists")
        self.email = email


class LicenseCheckError(CRMError):
    """Upstream license panel failed or answered with an error."""


class SheetsError(CRMError):
    """A Google Sheets API call failed."""
