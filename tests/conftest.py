"""Shared fixtures: a fresh in-memory document store per test and an API client bound to it."""

import os

# Settings are read at import time, so pin them before crm is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from crm.auth.identity import IdentityProvider
from crm.auth.profiles import ProfileResolver
from crm.db.session import build_engine, get_db, init_db
from crm.db.store import DocumentStore
from crm.main import app
from crm.schemas.session import Role


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def store(db) -> DocumentStore:
    return DocumentStore(db)


@pytest.fixture()
def client(engine):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@dataclass
class AuthedUser:
    uid: str
    email: str
    headers: Dict[str, str]


@pytest.fixture()
def make_user(engine) -> Callable[..., AuthedUser]:
    """
    Create an account and return its uid with bearer headers.

    role=None leaves the account without a profile, which exercises the
    default-role fallback.
    """
    counter = {"n": 0}

    def _make(role: Optional[str] = "user", email: Optional[str] = None, password: str = "pw") -> AuthedUser:
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        with Session(engine) as session:
            store = DocumentStore(session)
            provider = IdentityProvider(store)
            identity = provider.register(email, password, display_name=f"User {counter['n']}")
            if role is not None:
                ProfileResolver(store).create_profile(identity, role=Role(id=role, name=role))
            token = provider.issue_token(identity)
        return AuthedUser(uid=identity.uid, email=email, headers={"Authorization": f"Bearer {token}"})

    return _make


@pytest.fixture()
def user_headers(make_user):
    return make_user("user").headers


@pytest.fixture()
def admin_headers(make_user):
    return make_user("admin").headers
