from pydantic import BaseModel, ConfigDict
from typing import Optional


class Role(BaseModel):
    """Application-level permission label, stored apart from the identity."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str

    @classmethod
    def coerce(cls, value) -> "Role":
        # Older profile records keep the role as a bare string
        if isinstance(value, Role):
            return value
        if isinstance(value, str):
            return cls(id=value, name=value)
        return cls.model_validate(value)


DEFAULT_ROLE = Role(id="user", name="user")

PRIVILEGED_ROLE_IDS = frozenset({"admin", "super_admin"})


class Identity(BaseModel):
    """The authenticated principal issued by the identity provider."""
    model_config = ConfigDict(frozen=True)

    uid: str
    email: str
    display_name: Optional[str] = None


class SessionUser(Identity):
    """An identity merged with its resolved role."""
    role: Role

    @property
    def is_privileged(self) -> bool:
        return self.role.id in PRIVILEGED_ROLE_IDS

    @classmethod
    def from_identity(cls, identity: Identity, role: Role) -> "SessionUser":
        return cls(**identity.model_dump(), role=role)


class SessionState(BaseModel):
    """What the session publisher hands to subscribers; replaced wholesale on every change."""
    model_config = ConfigDict(frozen=True)

    user: Optional[SessionUser] = None
    loading: bool = False

    @property
    def authenticated(self) -> bool:
        return self.user is not None and not self.loading
