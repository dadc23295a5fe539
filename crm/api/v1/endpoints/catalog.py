"""
Plain CRUD routers for the collections with no behaviour of their own.

Departments are organisation structure and only admins may change them;
the rest are writable by any signed-in user.
"""
from crm.api import deps
from crm.api.v1.crud import build_crud_router
from crm.schemas.people import (
    CustomerCreate, CustomerRead, CustomerUpdate,
    DepartmentCreate, DepartmentRead, DepartmentUpdate,
    EmployeeCreate, EmployeeRead, EmployeeUpdate,
)
from crm.schemas.work import (
    InvoiceCreate, InvoiceRead, InvoiceUpdate,
    ProductCreate, ProductRead, ProductUpdate,
    TaskCreate, TaskRead, TaskUpdate,
)
from crm.services.catalog import (
    customer_service,
    department_service,
    employee_service,
    invoice_service,
    product_service,
    task_service,
)

customers_router = build_crud_router(customer_service, CustomerCreate, CustomerUpdate, CustomerRead, label="Customer")
employees_router = build_crud_router(employee_service, EmployeeCreate, EmployeeUpdate, EmployeeRead, label="Employee")
departments_router = build_crud_router(
    department_service, DepartmentCreate, DepartmentUpdate, DepartmentRead,
    label="Department", write_dependency=deps.get_current_admin,
)
tasks_router = build_crud_router(task_service, TaskCreate, TaskUpdate, TaskRead, label="Task")
invoices_router = build_crud_router(invoice_service, InvoiceCreate, InvoiceUpdate, InvoiceRead, label="Invoice")
products_router = build_crud_router(product_service, ProductCreate, ProductUpdate, ProductRead, label="Product")
