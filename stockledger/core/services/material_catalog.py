"""Material catalog service: creation, lookup, edits and status changes."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from stockledger.config import get_logger
from stockledger.core.entities.material import (
    NAME_MAX_LENGTH,
    UNIT_MAX_LENGTH,
    Material,
    MaterialStatus,
)
from stockledger.core.exceptions import (
    AccessDeniedError,
    InvalidInputError,
    MaterialNotFoundError,
)
from stockledger.core.interfaces.authorization import IAuthorizationContext
from stockledger.core.interfaces.material_store import IMaterialStore
from stockledger.core.services.stock_impact import MAX_AMOUNT, quantize, to_decimal

logger = get_logger(__name__)


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name or len(name) > NAME_MAX_LENGTH:
        raise InvalidInputError(
            "name", f"is required and must be at most {NAME_MAX_LENGTH} characters", name
        )
    return name


def _clean_unit(unit: str | None) -> str:
    unit = (unit or "").strip()
    if not unit or len(unit) > UNIT_MAX_LENGTH:
        raise InvalidInputError(
            "unit", f"is required and must be at most {UNIT_MAX_LENGTH} characters", unit
        )
    return unit


def _parse_min_level(min_level: Any) -> Decimal:
    level = to_decimal(min_level)
    if level is None or level < 0 or level >= MAX_AMOUNT:
        raise InvalidInputError(
            "min_level", f"must be a number >= 0 and below {MAX_AMOUNT:f}", min_level
        )
    return quantize(level)


class MaterialCatalog:
    """Owner-scoped access to a project's materials. Never touches stock."""

    def __init__(
        self,
        material_store: IMaterialStore,
        authorization: IAuthorizationContext,
    ):
        self._material_store = material_store
        self._authorization = authorization

    async def _ensure_owner(
        self,
        actor_user_id: str | None,
        project_id: str,
        material_id: str | None = None,
    ) -> None:
        if not actor_user_id or not await self._authorization.is_project_owner(
            actor_user_id, project_id
        ):
            logger.warning(
                "catalog_access_denied",
                project_id=project_id,
                material_id=material_id,
                actor_user_id=actor_user_id,
            )
            raise AccessDeniedError(material_id, project_id)

    async def create_material(
        self,
        project_id: str,
        name: str,
        unit: str,
        min_level: Any,
        actor_user_id: str | None,
    ) -> Material:
        """Create a material with zero stock."""
        name = _clean_name(name)
        unit = _clean_unit(unit)
        level = _parse_min_level(min_level)

        await self._ensure_owner(actor_user_id, project_id)

        now = datetime.now(UTC)
        material = await self._material_store.create_material(
            Material(
                project_id=project_id,
                name=name,
                unit=unit,
                min_level=level,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "material_registered",
            material_id=material.id,
            project_id=project_id,
            name=name,
        )
        return material

    async def get_material(self, material_id: str) -> Material:
        material = await self._material_store.get_material(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)
        return material

    async def list_materials(
        self,
        project_id: str,
        actor_user_id: str | None,
        include_archived: bool = False,
    ) -> list[Material]:
        await self._ensure_owner(actor_user_id, project_id)
        return await self._material_store.list_by_project(
            project_id, include_archived=include_archived
        )

    async def list_low_stock(
        self, project_id: str, actor_user_id: str | None
    ) -> list[Material]:
        """Active materials at or below their reorder threshold."""
        await self._ensure_owner(actor_user_id, project_id)
        return await self._material_store.list_low_stock(project_id)

    async def update_material(
        self,
        material_id: str,
        project_id: str,
        actor_user_id: str | None,
        name: str | None = None,
        unit: str | None = None,
        min_level: Any = None,
    ) -> Material:
        """
        Partially update a material's name, unit and reorder threshold.

        Fields left as None keep their current value. Stock, status and
        version are never touched here.
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _clean_name(name)
        if unit is not None:
            changes["unit"] = _clean_unit(unit)
        if min_level is not None:
            changes["min_level"] = _parse_min_level(min_level)

        material = await self._material_store.get_material(material_id)
        if material is None or not material.belongs_to(project_id):
            raise MaterialNotFoundError(material_id)
        await self._ensure_owner(actor_user_id, project_id, material_id)

        if not changes:
            return material

        changes["updated_at"] = datetime.now(UTC)
        updated = await self._material_store.update_material(
            material.model_copy(update=changes)
        )
        if updated is None:
            raise MaterialNotFoundError(material_id)
        logger.info(
            "material_updated",
            material_id=material_id,
            fields=sorted(k for k in changes if k != "updated_at"),
        )
        return updated

    async def _change_status(
        self,
        material_id: str,
        project_id: str,
        actor_user_id: str | None,
        status: MaterialStatus,
    ) -> Material:
        material = await self._material_store.get_material(material_id)
        if material is None or not material.belongs_to(project_id):
            raise MaterialNotFoundError(material_id)
        await self._ensure_owner(actor_user_id, project_id, material_id)

        updated = await self._material_store.set_status(material_id, status)
        if updated is None:
            raise MaterialNotFoundError(material_id)
        logger.info("material_status_changed", material_id=material_id, status=status.value)
        return updated

    async def archive_material(
        self, material_id: str, project_id: str, actor_user_id: str | None
    ) -> Material:
        """Archived materials reject new stock movements."""
        return await self._change_status(
            material_id, project_id, actor_user_id, MaterialStatus.ARCHIVED
        )

    async def activate_material(
        self, material_id: str, project_id: str, actor_user_id: str | None
    ) -> Material:
        return await self._change_status(
            material_id, project_id, actor_user_id, MaterialStatus.ACTIVE
        )
