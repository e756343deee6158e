"""Supplier domain entity."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

SUPPLIER_NAME_MAX_LENGTH = 160
RUC_MAX_LENGTH = 20
PHONE_MAX_LENGTH = 32
EMAIL_MAX_LENGTH = 160


class Supplier(BaseModel):
    """
    A vendor that ENTRY movements may cite.

    Suppliers are shared by all projects. ``ruc`` is the vendor's tax
    registration number.
    """

    id: str | None = None
    name: str
    ruc: str | None = None
    phone: str | None = None
    email: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
