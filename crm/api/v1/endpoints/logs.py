from typing import Any, List
from fastapi import APIRouter, Depends, Query
from crm.api import deps
from crm.db.store import DocumentStore
from crm.schemas.log import ActivityLogRead
from crm.schemas.session import SessionUser
from crm.services.activity_log import list_logs

router = APIRouter()


@router.get("", response_model=List[ActivityLogRead])
def read_logs(
    limit: int = Query(default=100, ge=1, le=1000),
    store: DocumentStore = Depends(deps.get_store),
    current_user: SessionUser = Depends(deps.get_current_admin),
) -> Any:
    """
    Most recent activity log entries first.
    """
    return list_logs(store, limit=limit)
