from enum import Enum
from typing import Optional
from pydantic import BaseModel


class LogLevel(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class ActivityLogRead(BaseModel):
    id: str
    action: str
    module: str
    details: Optional[str] = None
    level: LogLevel = LogLevel.INFO
    timestamp: str
    actor_uid: Optional[str] = None
