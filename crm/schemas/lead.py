"""
Lead Schemas Module

Leads move through a fixed set of sales statuses. Follow-ups are scheduled
contacts attached to a lead by its document id.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class LeadStatus(str, Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    FOLLOW_UP_SCHEDULED = "Follow-Up Scheduled"
    INTERESTED = "Interested"
    NOT_INTERESTED = "Not Interested"
    CALLBACK_REQUESTED = "Callback Requested"
    IN_PROGRESS = "In Progress / Under Discussion"
    CONVERTED = "Converted / Closed-Won"
    LOST = "Lost / Closed-Lost"
    DISQUALIFIED = "Disqualified"


class LeadBase(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    status: Optional[LeadStatus] = None
    source: Optional[str] = None


class LeadCreate(LeadBase):
    name: str
    status: LeadStatus = LeadStatus.NEW


class LeadUpdate(LeadBase):
    pass


class LeadRead(LeadBase):
    id: str
    uuid: Optional[str] = None
    visible_id: Optional[str] = None


class FollowUpStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"


class FollowUpType(str, Enum):
    FOLLOW_UP_SCHEDULED = "Follow-Up Scheduled"
    CALLBACK_REQUESTED = "Callback Requested"


class FollowUpBase(BaseModel):
    notes: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[FollowUpStatus] = None
    date: Optional[str] = None
    time: Optional[str] = None
    type: Optional[FollowUpType] = None


class FollowUpCreate(FollowUpBase):
    notes: str
    due_date: str
    status: FollowUpStatus = FollowUpStatus.PENDING


class FollowUpUpdate(FollowUpBase):
    pass


class FollowUpRead(FollowUpBase):
    id: str
    lead_id: str


class ScheduledTask(FollowUpRead):
    """A follow-up joined with the lead it belongs to."""
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    task_type: str = ""
