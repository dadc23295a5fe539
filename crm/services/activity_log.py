import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from crm.db.store import DocumentStore

logger = logging.getLogger(__name__)

LOGS_COLLECTION = "logs"


def add_log(
    store: DocumentStore,
    action: str,
    module: str,
    details: str,
    level: str = "info",
    actor_uid: Optional[str] = None,
) -> Dict[str, Any]:
    """Record an audit entry such as ("create", "roles", "Created new role: Sales")."""
    logger.info("[%s] %s: %s", module, action, details)
    return store.add(LOGS_COLLECTION, {
        "action": action,
        "module": module,
        "details": details,
        "level": level,
        "actor_uid": actor_uid,
        "timestamp": datetime.utcnow().isoformat(),
    })


def list_logs(store: DocumentStore, limit: int = 100) -> List[Dict[str, Any]]:
    # Newest first
    logs = store.list_all(LOGS_COLLECTION, order_by="timestamp")
    logs.reverse()
    return logs[:limit]
