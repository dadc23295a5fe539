"""
Generic CRUD Router Module

Builds the list/read/create/update/delete endpoints for collections that
need nothing beyond the basic five operations.
"""
from typing import Any, Callable, List, Type
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from crm.api import deps
from crm.core.exceptions import DocumentNotFound
from crm.db.store import DocumentStore
from crm.schemas.session import SessionUser
from crm.services.crud import CollectionService


def build_crud_router(
    service_factory: Callable[[DocumentStore], CollectionService],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
    label: str,
    write_dependency: Callable[..., SessionUser] = deps.get_current_user,
) -> APIRouter:
    """
    Args:
        service_factory: Builds the collection service from a store
        create_schema: Body schema for POST
        update_schema: Body schema for PATCH (only set fields are written)
        read_schema: Response schema
        label: Human name used in error messages (e.g., "Customer")
        write_dependency: Who may create, update and delete (defaults to any signed-in user)
    """
    router = APIRouter()

    def get_service(store: DocumentStore = Depends(deps.get_store)) -> CollectionService:
        return service_factory(store)

    @router.get("", response_model=List[read_schema])
    def list_items(
        service: CollectionService = Depends(get_service),
        current_user: SessionUser = Depends(deps.get_current_user),
    ) -> Any:
        return service.list()

    @router.get("/{item_id}", response_model=read_schema)
    def read_item(
        item_id: str,
        service: CollectionService = Depends(get_service),
        current_user: SessionUser = Depends(deps.get_current_user),
    ) -> Any:
        try:
            return service.get(item_id)
        except DocumentNotFound:
            raise HTTPException(status_code=404, detail=f"{label} not found")

    @router.post("", response_model=read_schema)
    def create_item(
        item_in: create_schema,
        service: CollectionService = Depends(get_service),
        current_user: SessionUser = Depends(write_dependency),
    ) -> Any:
        return service.create(item_in.model_dump(mode="json"))

    @router.patch("/{item_id}", response_model=read_schema)
    def update_item(
        item_id: str,
        item_in: update_schema,
        service: CollectionService = Depends(get_service),
        current_user: SessionUser = Depends(write_dependency),
    ) -> Any:
        try:
            return service.update(item_id, item_in.model_dump(mode="json", exclude_unset=True))
        except DocumentNotFound:
            raise HTTPException(status_code=404, detail=f"{label} not found")

    @router.delete("/{item_id}")
    def delete_item(
        item_id: str,
        service: CollectionService = Depends(get_service),
        current_user: SessionUser = Depends(write_dependency),
    ) -> Any:
        try:
            service.delete(item_id)
        except DocumentNotFound:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return {"status": "success", "detail": f"{label} deleted"}

    return router
