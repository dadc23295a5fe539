"""
Role Endpoints Module

Role definitions are readable by everyone and writable by admins. Every
write leaves an entry in the activity log.
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException
from crm.api import deps
from crm.core.exceptions import DocumentNotFound
from crm.db.store import DocumentStore
from crm.schemas.people import RoleCreate, RoleRead, RoleUpdate
from crm.schemas.session import SessionUser
from crm.services.catalog import RoleService

router = APIRouter()


@router.get("", response_model=List[RoleRead])
def list_roles(
    store: DocumentStore = Depends(deps.get_store),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    return RoleService(store).list()


@router.post("", response_model=RoleRead)
def create_role(
    role_in: RoleCreate,
    store: DocumentStore = Depends(deps.get_store),
    current_user: SessionUser = Depends(deps.get_current_admin),
) -> Any:
    return RoleService(store, actor_uid=current_user.uid).create(role_in.model_dump())


@router.patch("/{role_id}", response_model=RoleRead)
def update_role(
    role_id: str,
    role_in: RoleUpdate,
    store: DocumentStore = Depends(deps.get_store),
    current_user: SessionUser = Depends(deps.get_current_admin),
) -> Any:
    try:
        return RoleService(store, actor_uid=current_user.uid).update(role_id, role_in.model_dump(exclude_unset=True))
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Role not found")


@router.delete("/{role_id}")
def delete_role(
    role_id: str,
    store: DocumentStore = Depends(deps.get_store),
    current_user: SessionUser = Depends(deps.get_current_admin),
) -> Any:
    try:
        RoleService(store, actor_uid=current_user.uid).delete(role_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Role not found")
    return {"status": "success", "detail": "Role deleted"}
