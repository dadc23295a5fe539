"""
Lead Endpoints Module

This module provides CRUD endpoints for leads and their follow-ups, and the
"scheduled tasks" view that lists every follow-up next to its lead's contact details.
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException
from crm.api import deps
from crm.core.exceptions import DocumentNotFound
from crm.db.store import DocumentStore
from crm.schemas.lead import (
    FollowUpCreate,
    FollowUpRead,
    FollowUpUpdate,
    LeadCreate,
    LeadRead,
    LeadUpdate,
    ScheduledTask,
)
from crm.schemas.session import SessionUser
from crm.services.leads import LeadService

router = APIRouter()


def get_lead_service(store: DocumentStore = Depends(deps.get_store)) -> LeadService:
    return LeadService(store)


@router.get("", response_model=List[LeadRead])
def list_leads(
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Retrieve all leads ordered by name.
    """
    return service.list()


@router.get("/scheduled", response_model=List[ScheduledTask])
def list_scheduled_tasks(
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Every follow-up ordered by due date, with the client's name and phone.
    """
    return service.list_all_follow_ups()


@router.get("/{lead_id}", response_model=LeadRead)
def read_lead(
    lead_id: str,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        return service.get(lead_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Lead not found")


@router.post("", response_model=LeadRead)
def create_lead(
    lead_in: LeadCreate,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Create a lead. A uuid and the next L-#### visible id are assigned automatically.
    """
    return service.create(lead_in.model_dump(mode="json"))


@router.patch("/{lead_id}", response_model=LeadRead)
def update_lead(
    lead_id: str,
    lead_in: LeadUpdate,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        return service.update(lead_id, lead_in.model_dump(mode="json", exclude_unset=True))
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Lead not found")


@router.delete("/{lead_id}")
def delete_lead(
    lead_id: str,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        service.delete(lead_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Lead not found")
    return {"status": "success", "detail": "Lead deleted"}


@router.get("/{lead_id}/follow-ups", response_model=List[FollowUpRead])
def list_follow_ups(
    lead_id: str,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    return service.list_follow_ups(lead_id)


@router.post("/{lead_id}/follow-ups", response_model=FollowUpRead)
def add_follow_up(
    lead_id: str,
    follow_up_in: FollowUpCreate,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        return service.add_follow_up(lead_id, follow_up_in.model_dump(mode="json"))
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Lead not found")


@router.patch("/follow-ups/{follow_up_id}", response_model=FollowUpRead)
def update_follow_up(
    follow_up_id: str,
    follow_up_in: FollowUpUpdate,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        return service.update_follow_up(follow_up_id, follow_up_in.model_dump(mode="json", exclude_unset=True))
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Follow-up not found")


@router.delete("/follow-ups/{follow_up_id}")
def delete_follow_up(
    follow_up_id: str,
    service: LeadService = Depends(get_lead_service),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    try:
        service.delete_follow_up(follow_up_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Follow-up not found")
    return {"status": "success", "detail": "Follow-up deleted"}
