"""
Customer, Employee, Department and Role schemas.

Employees carry denormalized copies of their department and role rather
than references, so renaming a department does not rewrite employees.
"""
from typing import Optional
from pydantic import BaseModel


class NamedBase(BaseModel):
    name: Optional[str] = None


class NamedCreate(NamedBase):
    name: str


class NamedRead(NamedBase):
    id: str
    name: str


# Departments and roles share the same {id, name} shape
DepartmentCreate = NamedCreate
DepartmentUpdate = NamedBase
DepartmentRead = NamedRead
RoleCreate = NamedCreate
RoleUpdate = NamedBase
RoleRead = NamedRead


class CustomerBase(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company: Optional[str] = None


class CustomerCreate(CustomerBase):
    name: str
    email: str


class CustomerUpdate(CustomerBase):
    pass


class CustomerRead(CustomerBase):
    id: str
    uuid: Optional[str] = None
    visible_id: Optional[str] = None


class EmployeeBase(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[NamedRead] = None
    role: Optional[NamedRead] = None


class EmployeeCreate(EmployeeBase):
    name: str
    email: str


class EmployeeUpdate(EmployeeBase):
    pass


class EmployeeRead(EmployeeBase):
    id: str
    uuid: Optional[str] = None
    visible_id: Optional[str] = None
