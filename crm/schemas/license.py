from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class TierBase(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)


class TierCreate(TierBase):
    name: str
    price: float = Field(ge=0)


class TierUpdate(TierBase):
    pass


class TierRead(TierBase):
    id: str


class LicenseBase(BaseModel):
    user_id: Optional[str] = None
    tier_id: Optional[str] = None
    status: Optional[str] = None


class LicenseCreate(LicenseBase):
    user_id: str
    tier_id: str
    status: str = "active"


class LicenseUpdate(LicenseBase):
    pass


class LicenseRead(LicenseBase):
    id: str


class LicenseVerifyRequest(BaseModel):
    # Wire name kept as the license panel expects it
    model_config = ConfigDict(populate_by_name=True)

    # Any JSON value; the panel decides what a valid tenant looks like
    tenant_id: Optional[Any] = Field(default=None, alias="tenantId")


LicenseVerifyResponse = Dict[str, Any]
