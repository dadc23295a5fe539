from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from crm.schemas.session import Role

# Shared properties
class UserProfileBase(BaseModel):
    email: Optional[EmailStr] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, value):
        return None if value is None else Role.coerce(value)

# Properties to receive via API on update (merged into the stored profile)
class UserProfileUpdate(UserProfileBase):
    pass

# Properties to return to client
class UserProfileRead(UserProfileBase):
    uid: str
    email: str
    role: Role
