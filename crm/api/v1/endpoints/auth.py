"""
Authentication Endpoints Module

This module provides authentication endpoints for account registration, login, and logout,
plus the two read-outs a client needs after signing in: the bare identity and the
resolved session (identity + role).
The system supports both JWT bearer token authentication and HTTP-only cookie-based
authentication for browser clients.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm
from crm.api import deps
from crm.auth.identity import IdentityProvider
from crm.auth.profiles import ProfileResolver
from crm.core.config import settings
from crm.core.exceptions import AccountExists
from crm.schemas.auth import Token, UserRegister
from crm.schemas.session import Identity, SessionUser

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=Identity)
def register_user(
    user_in: UserRegister,
    provider: IdentityProvider = Depends(deps.get_identity_provider),
    resolver: ProfileResolver = Depends(deps.get_profile_resolver),
):
    """
    Register a new account.

    The password is hashed before storage, and a profile carrying the default
    role is written alongside the account.

    Raises:
        HTTPException 400: If an account with this email already exists
    """
    try:
        identity = provider.register(user_in.email, user_in.password, user_in.display_name)
    except AccountExists:
        raise HTTPException(
            status_code=400,
            detail="User with this email already exists."
        )
    resolver.create_profile(identity)
    return identity


@router.post("/login", response_model=Token)
def login(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    provider: IdentityProvider = Depends(deps.get_identity_provider),
):
    """
    Authenticate and issue an access token.

    The token is also set as an HTTP-only cookie for browser clients.
    Note: OAuth2PasswordRequestForm uses 'username' field, but we treat it as email.

    Raises:
        HTTPException 401: If credentials are invalid
    """
    identity = provider.authenticate(form_data.username, form_data.password)
    if identity is None:
        logger.info("Failed login for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = provider.issue_token(identity)

    # httponly=True prevents JavaScript access to the cookie (XSS protection)
    # samesite="lax" provides CSRF protection while allowing normal navigation
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax"
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/logout")
def logout(response: Response):
    """
    Log out by clearing the authentication cookie. API clients can simply discard their token.
    """
    response.delete_cookie("access_token")
    return {"status": "success"}


@router.get("/me", response_model=Identity)
def read_identity(identity: Identity = Depends(deps.get_current_identity)):
    return identity


@router.get("/session", response_model=SessionUser)
def read_session(current_user: SessionUser = Depends(deps.get_current_user)):
    """
    The caller's identity merged with its resolved role (default role when no profile exists).
    """
    return current_user
