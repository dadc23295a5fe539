"""
Project, Task, Invoice and Product schemas.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class ProjectBase(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[str] = None  # ISO format (YYYY-MM-DD)
    end_date: Optional[str] = None
    budget: Optional[float] = None
    client_id: Optional[str] = None


class ProjectCreate(ProjectBase):
    name: str
    status: ProjectStatus = ProjectStatus.PLANNING


class ProjectUpdate(ProjectBase):
    pass


class ProjectRead(ProjectBase):
    id: str


class TaskBase(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None  # e.g., "todo", "in_progress", "done"
    due_date: Optional[str] = None
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None


class TaskCreate(TaskBase):
    title: str
    status: str = "todo"


class TaskUpdate(TaskBase):
    pass


class TaskRead(TaskBase):
    id: str


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class InvoiceBase(BaseModel):
    customer_id: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    status: Optional[InvoiceStatus] = None
    issue_date: Optional[str] = None
    due_date: Optional[str] = None


class InvoiceCreate(InvoiceBase):
    customer_id: str
    amount: float = Field(ge=0)
    currency: str = "USD"
    status: InvoiceStatus = InvoiceStatus.DRAFT


class InvoiceUpdate(InvoiceBase):
    pass


class InvoiceRead(InvoiceBase):
    id: str
    visible_id: Optional[str] = None


class ProductBase(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None


class ProductCreate(ProductBase):
    name: str
    price: float = Field(ge=0)


class ProductUpdate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: str
    uuid: Optional[str] = None
    visible_id: Optional[str] = None
