"""Abstract interface for supplier catalog storage."""

from abc import ABC, abstractmethod

from stockledger.core.entities.supplier import Supplier


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a new supplier and return it with its id."""
        pass

    @abstractmethod
    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        """Get supplier by ID."""
        pass

    @abstractmethod
    async def list_suppliers(self) -> list[Supplier]:
        """List all suppliers ordered by name."""
        pass

    @abstractmethod
    async def update_supplier(self, supplier: Supplier) -> Supplier | None:
        """Overwrite the supplier's contact fields. None if it does not exist."""
        pass
