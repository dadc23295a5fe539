"""
Project Endpoints Module

This module provides CRUD endpoints for managing projects. Projects are shared
records: any signed-in user can see and edit them, and each screen re-reads the
list after a change instead of merging locally.
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from crm.api import deps
from crm.core.exceptions import DocumentNotFound
from crm.db.store import DocumentStore
from crm.schemas.session import SessionUser
from crm.schemas.work import ProjectCreate, ProjectRead, ProjectStatus, ProjectUpdate
from crm.services.catalog import project_service
from crm.services.crud import CollectionService

router = APIRouter()


def get_project_service(store: DocumentStore = Depends(deps.get_store)) -> CollectionService:
    return project_service(store)


@router.get("", response_model=List[ProjectRead])
def list_projects(
    status: Optional[ProjectStatus] = None,
    client_id: Optional[str] = None,
    service: CollectionService = Depends(get_project_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Retrieve all projects ordered by name.

    Args:
        status: Only return projects in this status
        client_id: Only return projects for this client
    """
    projects = service.list()
    if status:
        projects = [p for p in projects if p.get("status") == status.value]
    if client_id:
        projects = [p for p in projects if p.get("client_id") == client_id]
    return projects


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: str,
    service: CollectionService = Depends(get_project_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Get a specific project by ID.

    Raises:
        HTTPException 404: If the project doesn't exist
    """
    try:
        return service.get(project_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Project not found")


@router.post("", response_model=ProjectRead)
def create_project(
    project_in: ProjectCreate,
    service: CollectionService = Depends(get_project_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    return service.create(project_in.model_dump(mode="json"))


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: str,
    project_in: ProjectUpdate,
    service: CollectionService = Depends(get_project_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Update an existing project. Only the fields present in the body are written.

    Raises:
        HTTPException 404: If the project doesn't exist
    """
    try:
        return service.update(project_id, project_in.model_dump(mode="json", exclude_unset=True))
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Project not found")


@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    service: CollectionService = Depends(get_project_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        service.delete(project_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"status": "success", "detail": "Project deleted"}
