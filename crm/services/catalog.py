"""
Service factories for the plain collections.

Each entity maps to one collection; the ones shown with a visible number get
a prefix. Roles additionally write to the activity log on every change.
"""
from typing import Any, Dict, Optional

from crm.db.store import DocumentStore
from crm.services.activity_log import add_log
from crm.services.crud import CollectionService

CUSTOMERS = "customers"
EMPLOYEES = "employees"
DEPARTMENTS = "departments"
ROLES = "roles"
PROJECTS = "projects"
TASKS = "tasks"
INVOICES = "invoices"
PRODUCTS = "products"
LICENSES = "licenses"
LICENSE_TIERS = "license_tiers"


def customer_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, CUSTOMERS, prefix="C", order_by="name")


def employee_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, EMPLOYEES, prefix="E", order_by="name")


def department_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, DEPARTMENTS, order_by="name")


def project_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, PROJECTS, order_by="name")


def task_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, TASKS, order_by="due_date")


def invoice_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, INVOICES, prefix="INV")


def product_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, PRODUCTS, prefix="P", order_by="name")


def license_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, LICENSES)


def tier_service(store: DocumentStore) -> CollectionService:
    return CollectionService(store, LICENSE_TIERS, order_by="name")


class RoleService(CollectionService):
    """Role CRUD with an audit trail in the `logs` collection."""

    def __init__(self, store: DocumentStore, actor_uid: Optional[str] = None):
        super().__init__(store, ROLES, order_by="name")
        self.actor_uid = actor_uid

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        role = super().create(data)
        add_log(self.store, "create", ROLES, f"Created new role: {role.get('name')}", actor_uid=self.actor_uid)
        return role

    def update(self, doc_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        role = super().update(doc_id, updates)
        add_log(self.store, "update", ROLES, f"Updated role: {role.get('name') or 'unknown'}", actor_uid=self.actor_uid)
        return role

    def delete(self, doc_id: str) -> None:
        role = self.get(doc_id)
        super().delete(doc_id)
        add_log(self.store, "delete", ROLES, f"Deleted role: {role.get('name')}", actor_uid=self.actor_uid)
