"""
Profile Resolver Module

Looks up the application role for an identity. Roles live in the
`user_profiles` collection, one document per uid. A signed-in identity is
never blocked by a missing or unreadable profile: it gets the default role.
"""
import logging
from typing import Any, Dict, List, Optional

from crm.core.config import settings
from crm.core.exceptions import ProfileNotFound
from crm.db.store import DocumentStore
from crm.schemas.session import Identity, Role, SessionUser

logger = logging.getLogger(__name__)

PROFILES_COLLECTION = "user_profiles"


def configured_default_role() -> Role:
    return Role.coerce(settings.DEFAULT_ROLE)


class ProfileResolver:
    def __init__(self, store: DocumentStore, default_role: Optional[Role] = None):
        self.store = store
        self.default_role = default_role or configured_default_role()

    def get_profile(self, uid: str) -> Dict[str, Any]:
        profile = self.store.get(PROFILES_COLLECTION, uid)
        if profile is None:
            raise ProfileNotFound(uid)
        profile.setdefault("uid", uid)
        return profile

    def list_profiles(self) -> List[Dict[str, Any]]:
        profiles = self.store.list_all(PROFILES_COLLECTION, order_by="email")
        for profile in profiles:
            profile.setdefault("uid", profile["id"])
        return profiles

    def fetch_role(self, uid: str) -> Role:
        """Return the stored role. Raises ProfileNotFound if there is no usable one."""
        role = self.get_profile(uid).get("role")
        if not role:
            raise ProfileNotFound(uid)
        return Role.coerce(role)

    def resolve(self, identity: Identity) -> SessionUser:
        """Merge the identity with its role, degrading to the default role on any failure."""
        try:
            role = self.fetch_role(identity.uid)
        except Exception as exc:
            logger.warning("Profile lookup failed for %s, using role %r: %s", identity.uid, self.default_role.id, exc)
            role = self.default_role
        return SessionUser.from_identity(identity, role)

    def create_profile(self, identity: Identity, role: Optional[Role] = None) -> Dict[str, Any]:
        role = role or self.default_role
        return self.store.set(PROFILES_COLLECTION, identity.uid, {
            "uid": identity.uid,
            "email": identity.email,
            "display_name": identity.display_name,
            "role": role.model_dump(),
        })

    def update_profile(self, uid: str, data: Dict[str, Any]) -> Dict[str, Any]:
        # Merge write, so a profile can be created by its first update
        return self.store.set(PROFILES_COLLECTION, uid, {**data, "uid": uid}, merge=True)
