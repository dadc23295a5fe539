from fastapi import APIRouter
from crm.api.v1.endpoints import (
    auth, health, profiles, roles, leads, projects, licenses, logs, sheets, catalog
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(catalog.departments_router, prefix="/departments", tags=["departments"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])

# Resource endpoints
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(catalog.customers_router, prefix="/customers", tags=["customers"])
api_router.include_router(catalog.employees_router, prefix="/employees", tags=["employees"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(catalog.tasks_router, prefix="/tasks", tags=["tasks"])
api_router.include_router(catalog.invoices_router, prefix="/invoices", tags=["invoices"])
api_router.include_router(catalog.products_router, prefix="/products", tags=["products"])
api_router.include_router(licenses.router, prefix="/licenses", tags=["licenses"])
api_router.include_router(licenses.licenses_router, prefix="/licenses", tags=["licenses"])
api_router.include_router(licenses.tiers_router, prefix="/license-tiers", tags=["licenses"])

# Integrations
api_router.include_router(sheets.router, prefix="/sheets", tags=["sheets"])
