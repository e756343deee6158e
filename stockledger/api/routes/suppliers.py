"""Supplier catalog endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import get_actor_user_id, get_suppliers
from stockledger.application.dto.requests import CreateSupplierRequest, UpdateSupplierRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    SupplierListResponse,
    SupplierResponse,
)
from stockledger.core.entities import Supplier
from stockledger.core.services import SupplierCatalog

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


def supplier_to_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id,  # type: ignore[arg-type]
        name=supplier.name,
        ruc=supplier.ruc,
        phone=supplier.phone,
        email=supplier.email,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_supplier(
    request: CreateSupplierRequest,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: SupplierCatalog = Depends(get_suppliers),
) -> SupplierResponse:
    """Register a supplier that ENTRY movements can cite."""
    supplier = await catalog.create_supplier(
        request.name,
        ruc=request.ruc,
        phone=request.phone,
        email=request.email,
        actor_user_id=actor_user_id,
    )
    return supplier_to_response(supplier)


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: SupplierCatalog = Depends(get_suppliers),
) -> SupplierListResponse:
    suppliers = await catalog.list_suppliers()
    return SupplierListResponse(
        items=[supplier_to_response(s) for s in suppliers],
        total=len(suppliers),
    )


@router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: str,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: SupplierCatalog = Depends(get_suppliers),
) -> SupplierResponse:
    return supplier_to_response(await catalog.get_supplier(supplier_id))


@router.patch(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_supplier(
    supplier_id: str,
    request: UpdateSupplierRequest,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: SupplierCatalog = Depends(get_suppliers),
) -> SupplierResponse:
    """Partially update contact details; an empty string clears a field."""
    supplier = await catalog.update_supplier(
        supplier_id,
        name=request.name,
        ruc=request.ruc,
        phone=request.phone,
        email=request.email,
        actor_user_id=actor_user_id,
    )
    return supplier_to_response(supplier)
