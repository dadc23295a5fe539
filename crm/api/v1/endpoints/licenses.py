"""
License Endpoints Module

Admins manage license tiers and issue licenses to users; every user can
look up the licenses issued to them.
"""
from typing import Any, List
from fastapi import APIRouter, Depends
from crm.api import deps
from crm.api.v1.crud import build_crud_router
from crm.db.store import DocumentStore
from crm.schemas.license import (
    LicenseCreate,
    LicenseRead,
    LicenseUpdate,
    TierCreate,
    TierRead,
    TierUpdate,
)
from crm.schemas.session import SessionUser
from crm.services.catalog import LICENSES, license_service, tier_service

router = APIRouter()


@router.get("/mine", response_model=List[LicenseRead])
def read_my_licenses(
    store: DocumentStore = Depends(deps.get_store),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    return store.where(LICENSES, "user_id", current_user.uid)


# Mounted after `router` under the same prefix so "/mine" wins over "/{item_id}"
licenses_router = build_crud_router(
    license_service, LicenseCreate, LicenseUpdate, LicenseRead,
    label="License", write_dependency=deps.get_current_admin,
)

tiers_router = build_crud_router(
    tier_service, TierCreate, TierUpdate, TierRead,
    label="License tier", write_dependency=deps.get_current_admin,
)
