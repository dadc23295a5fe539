"""
License Verification Service Module

Forwards a tenant id to the upstream license panel with the configured
bearer secret and hands back the panel's JSON body untouched.
"""
import logging
from typing import Any, Optional

import httpx

from crm.core.config import settings
from crm.core.exceptions import LicenseCheckError
from crm.schemas.license import LicenseVerifyResponse

logger = logging.getLogger(__name__)

DEV_MODE_RESPONSE = {"status": "active"}


class LicenseVerifier:
    def __init__(
        self,
        panel_url: Optional[str],
        secret_key: Optional[str],
        dev_mode: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.panel_url = panel_url
        self.secret_key = secret_key
        self.dev_mode = dev_mode
        # Tests inject an httpx.MockTransport here
        self.transport = transport

    async def verify(self, tenant_id: Any) -> LicenseVerifyResponse:
        """
        Ask the panel about a tenant. Raises LicenseCheckError on any upstream failure.
        """
        if self.dev_mode:
            return dict(DEV_MODE_RESPONSE)
        if not self.panel_url:
            raise LicenseCheckError("LICENSE_PANEL_URL is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.secret_key or ''}",
        }
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                resp = await client.post(self.panel_url, json={"tenantId": tenant_id}, headers=headers)
                if resp.is_error:
                    raise LicenseCheckError(self._error_message(resp))
                return resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LicenseCheckError(str(exc) or "Failed to verify license") from exc

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"Failed to verify license (HTTP {resp.status_code})"


def get_license_verifier() -> LicenseVerifier:
    return LicenseVerifier(
        settings.LICENSE_PANEL_URL,
        settings.LICENSE_PANEL_SECRET_KEY,
        dev_mode=settings.LICENSE_DEV_MODE,
    )
