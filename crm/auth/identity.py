"""
Identity Provider Module

Email/password accounts kept in the `accounts` collection. The account's
document id is the identity's uid; profiles in `user_profiles` are keyed by
the same uid. Tokens are signed JWTs whose subject is the uid.
"""
import logging
from datetime import timedelta
from typing import Optional

from jose import JWTError

from crm.core.config import settings
from crm.core.exceptions import AccountExists, InvalidCredentials
from crm.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from crm.db.store import DocumentStore
from crm.schemas.session import Identity

logger = logging.getLogger(__name__)

ACCOUNTS_COLLECTION = "accounts"


def _identity(record: dict) -> Identity:
    return Identity(uid=record["id"], email=record["email"], display_name=record.get("display_name"))


class IdentityProvider:
    def __init__(self, store: DocumentStore):
        self.store = store

    def _find_account(self, email: str) -> Optional[dict]:
        matches = self.store.where(ACCOUNTS_COLLECTION, "email", email.strip().lower())
        return matches[0] if matches else None

    def register(self, email: str, password: str, display_name: Optional[str] = None) -> Identity:
        """Create an account. Raises AccountExists when the email is taken."""
        email = email.strip().lower()
        if self._find_account(email):
            raise AccountExists(email)
        record = self.store.add(ACCOUNTS_COLLECTION, {
            "email": email,
            "password_hash": get_password_hash(password),
            "display_name": display_name,
        })
        logger.info("Registered account %s", record["id"])
        return _identity(record)

    def authenticate(self, email: str, password: str) -> Optional[Identity]:
        account = self._find_account(email)
        if not account or not verify_password(password, account.get("password_hash")):
            return None
        return _identity(account)

    def get_identity(self, uid: str) -> Optional[Identity]:
        account = self.store.get(ACCOUNTS_COLLECTION, uid)
        return _identity(account) if account else None

    def issue_token(self, identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return create_access_token(
            subject=identity.uid,
            expires_delta=expires_delta,
            claims={"email": identity.email},
        )

    def verify_token(self, token: str) -> Identity:
        """
        Decode a bearer token into the identity it was issued for.

        Raises InvalidCredentials if the token is malformed, expired, or names
        an account that no longer exists.
        """
        try:
            payload = decode_access_token(token)
        except JWTError as exc:
            raise InvalidCredentials("Could not validate credentials") from exc
        uid = payload.get("sub")
        if not uid:
            raise InvalidCredentials("Token has no subject")
        identity = self.get_identity(uid)
        if identity is None:
            raise InvalidCredentials("Account not found")
        return identity
