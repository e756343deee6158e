"""Create Material Use Case: register a material in a project's catalog."""

from stockledger.application.dto.requests import CreateMaterialRequest
from stockledger.application.dto.responses import MaterialResponse
from stockledger.config import get_logger
from stockledger.core.entities.material import Material
from stockledger.core.services import MaterialCatalog

logger = get_logger(__name__)


def material_to_response(material: Material) -> MaterialResponse:
    return MaterialResponse(
        id=material.id,  # type: ignore[arg-type]
        project_id=material.project_id,
        name=material.name,
        unit=material.unit,
        stock=material.stock,
        min_level=material.min_level,
        status=material.status.value,
        is_low_stock=material.is_low_stock,
        created_at=material.created_at,
        updated_at=material.updated_at,
    )


class CreateMaterialUseCase:
    """Create a material with zero stock in an owned project."""

    def __init__(self, catalog: MaterialCatalog | None = None):
        self._catalog = catalog

    async def _get_catalog(self) -> MaterialCatalog:
        if self._catalog is None:
            from stockledger.application.services import get_material_catalog

            self._catalog = await get_material_catalog()
        return self._catalog

    async def execute(
        self,
        project_id: str,
        request: CreateMaterialRequest,
        actor_user_id: str | None,
    ) -> Material:
        """Execute create material use case."""
        logger.info("create_material_started", project_id=project_id, name=request.name)

        catalog = await self._get_catalog()
        return await catalog.create_material(
            project_id=project_id,
            name=request.name,
            unit=request.unit,
            min_level=request.min_level,
            actor_user_id=actor_user_id,
        )

    def to_response(self, material: Material) -> MaterialResponse:
        """Convert material to API response."""
        return material_to_response(material)
