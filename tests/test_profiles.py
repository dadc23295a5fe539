"""ProfileResolver: role lookup with the default-role fallback."""

from unittest.mock import MagicMock

import pytest

from crm.auth.profiles import ProfileResolver
from crm.core.config import settings
from crm.core.exceptions import ProfileNotFound
from crm.schemas.session import DEFAULT_ROLE, Identity, Role

ADA = Identity(uid="uid-ada", email="ada@example.com")


def test_fetch_role_from_profile(store):
    resolver = ProfileResolver(store)
    resolver.create_profile(ADA, role=Role(id="admin", name="Administrator"))

    assert resolver.fetch_role(ADA.uid) == Role(id="admin", name="Administrator")


def test_fetch_role_accepts_plain_string(store):
    store.set("user_profiles", ADA.uid, {"email": ADA.email, "role": "sales"})

    assert ProfileResolver(store).fetch_role(ADA.uid) == Role(id="sales", name="sales")


@pytest.mark.parametrize("profile", [None, {"email": "ada@example.com"}, {"email": "ada@example.com", "role": ""}])
def test_fetch_role_without_usable_role_raises(store, profile):
    if profile is not None:
        store.set("user_profiles", ADA.uid, profile)

    with pytest.raises(ProfileNotFound):
        ProfileResolver(store).fetch_role(ADA.uid)


def test_resolve_falls_back_to_default_role(store):
    user = ProfileResolver(store).resolve(ADA)

    assert user.uid == ADA.uid
    assert user.email == ADA.email
    assert user.role == DEFAULT_ROLE


def test_resolve_survives_store_failure():
    broken = MagicMock()
    broken.get.side_effect = RuntimeError("store unavailable")

    user = ProfileResolver(broken).resolve(ADA)

    assert user.role == DEFAULT_ROLE


def test_configured_default_role(store, monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_ROLE", "guest")

    user = ProfileResolver(store).resolve(ADA)

    assert user.role == Role(id="guest", name="guest")


def test_update_profile_merges(store):
    resolver = ProfileResolver(store)
    resolver.create_profile(ADA)

    resolver.update_profile(ADA.uid, {"phone_number": "555-0100"})

    profile = resolver.get_profile(ADA.uid)
    assert profile["phone_number"] == "555-0100"
    assert profile["role"] == DEFAULT_ROLE.model_dump()
    assert profile["email"] == ADA.email

