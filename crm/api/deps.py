"""
API Dependencies Module

This module provides FastAPI dependency functions for the document store,
authentication and role-based authorization.
It implements a dual authentication strategy supporting both bearer tokens (for API clients)
and HTTP-only cookies (for browser clients).
"""
from typing import Iterable, Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from crm.auth.identity import IdentityProvider
from crm.auth.profiles import ProfileResolver
from crm.core.config import settings
from crm.core.exceptions import InvalidCredentials, SheetsError
from crm.db.session import get_db
from crm.db.store import DocumentStore
from crm.schemas.session import Identity, PRIVILEGED_ROLE_IDS, SessionUser
from crm.services.sheets import SheetsClient, build_sheets_client

# Configure OAuth2 scheme to use the login endpoint
# auto_error=False allows us to check cookies as a fallback
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False  # Don't raise error immediately if Authorization header is missing
)


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


def get_identity_provider(store: DocumentStore = Depends(get_store)) -> IdentityProvider:
    return IdentityProvider(store)


def get_profile_resolver(store: DocumentStore = Depends(get_store)) -> ProfileResolver:
    return ProfileResolver(store)


def get_current_identity(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
    token: Optional[str] = Depends(reusable_oauth2),
) -> Identity:
    """
    Dependency that authenticates the caller and returns their identity.

    The function first checks for a bearer token in the Authorization header.
    If not found, it falls back to checking the access_token cookie.

    Raises:
        HTTPException 401: If no authentication token is provided
        HTTPException 403: If the token is invalid, expired, or its account is gone
    """
    # Try Authorization header first, then fall back to cookie
    if not token:
        token = request.cookies.get("access_token")
        # Cookie format is "Bearer <token>", so we need to extract the token
        if token and token.startswith("Bearer "):
            token = token[len("Bearer "):]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return provider.verify_token(token)
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )


def get_current_user(
    identity: Identity = Depends(get_current_identity),
    resolver: ProfileResolver = Depends(get_profile_resolver),
) -> SessionUser:
    """
    Dependency that merges the authenticated identity with its role.

    A missing or unreadable profile never rejects the request; the caller
    simply gets the default role.
    """
    return resolver.resolve(identity)


class RoleChecker:
    """
    Dependency factory for checking the session role.

    Usage: Depends(RoleChecker(["admin", "super_admin"]))
    """
    def __init__(self, allowed_roles: Iterable[str]):
        self.allowed_roles = frozenset(allowed_roles)

    def __call__(self, current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if current_user.role.id not in self.allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"The user does not have enough privileges. Required roles: {sorted(self.allowed_roles)}"
            )
        return current_user


get_current_admin = RoleChecker(PRIVILEGED_ROLE_IDS)


def get_sheets_client() -> SheetsClient:
    try:
        return build_sheets_client()
    except SheetsError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
