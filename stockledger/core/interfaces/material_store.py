"""Abstract interface for material catalog storage."""

from abc import ABC, abstractmethod

from stockledger.core.entities.material import Material, MaterialStatus


class IMaterialStore(ABC):
    """Interface for material persistence outside of stock movements."""

    @abstractmethod
    async def create_material(self, material: Material) -> Material:
        """Create a new material. Raises DuplicateMaterialError on name clash."""
        pass

    @abstractmethod
    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""
        pass

    @abstractmethod
    async def list_by_project(
        self, project_id: str, include_archived: bool = False
    ) -> list[Material]:
        """List materials of a project ordered by name."""
        pass

    @abstractmethod
    async def list_low_stock(self, project_id: str) -> list[Material]:
        """List active materials whose stock is at or below min_level."""
        pass

    @abstractmethod
    async def set_status(
        self, material_id: str, status: MaterialStatus
    ) -> Material | None:
        """Change material status. Stock is left untouched."""
        pass

    @abstractmethod
    async def update_material(self, material: Material) -> Material | None:
        """
        Overwrite name, unit and min_level. Stock and version are untouched.

        Returns None if the material does not exist. Raises
        DuplicateMaterialError on name clash.
        """
        pass
