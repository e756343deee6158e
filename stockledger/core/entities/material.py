"""
Material domain entities.

A material is a trackable inventory item scoped to one project.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

NAME_MAX_LENGTH = 160
UNIT_MAX_LENGTH = 32


class MaterialStatus(str, Enum):
    """Material lifecycle status."""

    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class Project(BaseModel):
    """Owning project, as far as ownership resolution needs it."""

    id: str
    name: str = ""
    owner_user_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Material(BaseModel):
    """
    A material with its running stock balance.

    Stock is only ever changed through the stock ledger. The version
    counter is bumped on every stock write.
    """

    id: str | None = None
    project_id: str
    name: str
    unit: str
    stock: Decimal = Decimal("0.000")
    min_level: Decimal = Decimal("0.000")
    status: MaterialStatus = MaterialStatus.ACTIVE
    version: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_active(self) -> bool:
        return self.status == MaterialStatus.ACTIVE

    @property
    def is_low_stock(self) -> bool:
        """Stock at or below the reorder threshold."""
        return self.stock <= self.min_level

    def belongs_to(self, project_id: str) -> bool:
        return self.project_id == project_id
