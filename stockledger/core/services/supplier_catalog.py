"""Supplier catalog service: registration, lookup and contact edits."""

import re
from datetime import UTC, datetime
from typing import Any

from stockledger.config import get_logger
from stockledger.core.entities.supplier import (
    EMAIL_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    RUC_MAX_LENGTH,
    SUPPLIER_NAME_MAX_LENGTH,
    Supplier,
)
from stockledger.core.exceptions import InvalidInputError, SupplierNotFoundError
from stockledger.core.interfaces.supplier_store import ISupplierStore

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name or len(name) > SUPPLIER_NAME_MAX_LENGTH:
        raise InvalidInputError(
            "name",
            f"is required and must be at most {SUPPLIER_NAME_MAX_LENGTH} characters",
            name,
        )
    return name


def _clean_optional(field: str, value: str | None, max_length: int) -> str | None:
    """Blank means absent."""
    value = (value or "").strip()
    if not value:
        return None
    if len(value) > max_length:
        raise InvalidInputError(field, f"must be at most {max_length} characters", value)
    return value


def _clean_email(email: str | None) -> str | None:
    email = _clean_optional("email", email, EMAIL_MAX_LENGTH)
    if email is not None and not EMAIL_RE.match(email):
        raise InvalidInputError("email", "must be a valid email address", email)
    return email


class SupplierCatalog:
    """
    Shared catalog of suppliers.

    Suppliers are not scoped to a project: any authenticated user may
    register one, and ENTRY movements in any project may cite it.
    """

    def __init__(self, supplier_store: ISupplierStore):
        self._supplier_store = supplier_store

    async def create_supplier(
        self,
        name: str,
        ruc: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        actor_user_id: str | None = None,
    ) -> Supplier:
        now = datetime.now(UTC)
        supplier = await self._supplier_store.create_supplier(
            Supplier(
                name=_clean_name(name),
                ruc=_clean_optional("ruc", ruc, RUC_MAX_LENGTH),
                phone=_clean_optional("phone", phone, PHONE_MAX_LENGTH),
                email=_clean_email(email),
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "supplier_registered",
            supplier_id=supplier.id,
            actor_user_id=actor_user_id,
        )
        return supplier

    async def get_supplier(self, supplier_id: str) -> Supplier:
        supplier = await self._supplier_store.get_supplier(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    async def list_suppliers(self) -> list[Supplier]:
        return await self._supplier_store.list_suppliers()

    async def update_supplier(
        self,
        supplier_id: str,
        name: str | None = None,
        ruc: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        actor_user_id: str | None = None,
    ) -> Supplier:
        """
        Partially update a supplier.

        None keeps the current value; an empty string clears an optional
        field. The name can be changed but never cleared.
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _clean_name(name)
        if ruc is not None:
            changes["ruc"] = _clean_optional("ruc", ruc, RUC_MAX_LENGTH)
        if phone is not None:
            changes["phone"] = _clean_optional("phone", phone, PHONE_MAX_LENGTH)
        if email is not None:
            changes["email"] = _clean_email(email)

        supplier = await self.get_supplier(supplier_id)
        if not changes:
            return supplier

        changes["updated_at"] = datetime.now(UTC)
        updated = await self._supplier_store.update_supplier(
            supplier.model_copy(update=changes)
        )
        if updated is None:
            raise SupplierNotFoundError(supplier_id)
        logger.info(
            "supplier_updated",
            supplier_id=supplier_id,
            fields=sorted(k for k in changes if k != "updated_at"),
            actor_user_id=actor_user_id,
        )
        return updated
