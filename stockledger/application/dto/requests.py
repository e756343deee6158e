"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Business rules (quantity sign, transaction type, notes length) are left
to the ledger so that their order and error codes stay consistent.
"""

from typing import Any

from pydantic import BaseModel, Field


class RegisterTransactionRequest(BaseModel):
    """Request to register one stock movement."""

    material_id: str = Field(..., description="Material ID")
    project_id: str = Field(..., description="Project the material belongs to")
    tx_type: Any = Field(
        ...,
        description="Movement type (case-sensitive)",
        examples=["ENTRY", "USAGE", "ADJUSTMENT"],
    )
    quantity: Any = Field(
        ...,
        description="Positive quantity, rounded to 3 decimal places",
        examples=["50", 12.5],
    )
    supplier_id: str | None = Field(default=None, description="Supplier reference")
    notes: str | None = Field(default=None, description="Free text, at most 400 characters")


class CreateMaterialRequest(BaseModel):
    """Request to register a material in a project."""

    name: str = Field(..., description="Material name, unique within the project")
    unit: str = Field(..., description="Unit of measure", examples=["kg", "m3", "bag"])
    min_level: Any = Field(
        default=0,
        description="Low-stock threshold (>= 0)",
        examples=["10", 2.5],
    )


class UpdateMaterialRequest(BaseModel):
    """Partial material update. Omitted fields keep their value."""

    name: str | None = Field(default=None, description="New name, unique within the project")
    unit: str | None = Field(default=None, description="New unit of measure")
    min_level: Any = Field(default=None, description="New low-stock threshold (>= 0)")


class CreateSupplierRequest(BaseModel):
    """Request to register a supplier."""

    name: str = Field(..., description="Supplier name, at most 160 characters")
    ruc: str | None = Field(default=None, description="Tax registration number")
    phone: str | None = Field(default=None, description="Contact phone")
    email: str | None = Field(default=None, description="Contact email")


class UpdateSupplierRequest(BaseModel):
    """Partial supplier update. Omitted fields keep their value; "" clears one."""

    name: str | None = None
    ruc: str | None = None
    phone: str | None = None
    email: str | None = None
