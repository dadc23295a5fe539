"""
HTTP Auth Client Module

An auth-state source backed by this service's own API, for scripts and
integrations that act on behalf of a signed-in user. Signing in or out
pushes the new identity to subscribers, so a SessionBootstrap can sit on
top of it exactly as it sits on an in-process AuthStateStream.
"""
import logging
from typing import Dict, Optional

import httpx

from crm.auth.state import AuthListener, AuthStateStream, Unsubscribe
from crm.core.exceptions import InvalidCredentials, ProfileNotFound
from crm.schemas.session import Identity, Role

logger = logging.getLogger(__name__)


class AuthClient:
    def __init__(self, http: httpx.AsyncClient, api_prefix: str = "/api/v1"):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")
        self.token: Optional[str] = None
        self._stream = AuthStateStream()

    @property
    def current(self) -> Optional[Identity]:
        return self._stream.current

    @property
    def headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        return self._stream.subscribe(listener)

    async def sign_in(self, email: str, password: str) -> Identity:
        resp = await self.http.post(
            f"{self.api_prefix}/auth/login",
            data={"username": email, "password": password},
        )
        if resp.status_code == 401:
            raise InvalidCredentials("Incorrect email or password")
        resp.raise_for_status()
        return await self.restore(resp.json()["access_token"])

    async def restore(self, token: str) -> Identity:
        """Adopt an existing token; publishes the identity it belongs to."""
        resp = await self.http.get(
            f"{self.api_prefix}/auth/me",
            headers={"Authorization": f"Bearer {token}"},
        )
        if resp.status_code in (401, 403, 404):
            await self.sign_out()
            raise InvalidCredentials("Token rejected")
        resp.raise_for_status()
        identity = Identity.model_validate(resp.json())
        self.token = token
        logger.info("Signed in as %s", identity.uid)
        await self._stream.publish(identity)
        return identity

    async def sign_out(self) -> None:
        self.token = None
        await self._stream.publish(None)


class RemoteRoleFetcher:
    """Reads a profile's role over HTTP with the client's current token."""

    def __init__(self, client: AuthClient):
        self.client = client

    async def fetch_role(self, uid: str) -> Role:
        resp = await self.client.http.get(
            f"{self.client.api_prefix}/profiles/{uid}",
            headers=self.client.headers,
        )
        if resp.status_code == 404:
            raise ProfileNotFound(uid)
        resp.raise_for_status()
        return Role.coerce(resp.json()["role"])
