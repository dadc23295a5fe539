from fastapi import APIRouter, Depends
from typing import Any
from sqlalchemy import text
from sqlmodel import Session
from crm.core.config import settings
from crm.db.session import get_db

router = APIRouter()

@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Health check endpoint. Also reports whether the document store answers.
    """
    try:
        db.exec(text("SELECT 1"))
        store = "ok"
    except Exception:
        store = "unavailable"
    return {"status": "ok", "version": settings.VERSION, "store": store}
