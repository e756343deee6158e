"""Abstract interface for the stock ledger storage."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from decimal import Decimal

from stockledger.core.entities.material import Material
from stockledger.core.entities.transaction import Transaction


class IStockUnitOfWork(ABC):
    """
    One atomic read-modify-write of a material's stock.

    Holds the storage write lock from the moment the material row is read
    until commit or rollback. ``material`` is None when the row is absent.
    """

    material: Material | None

    @abstractmethod
    async def append(self, transaction: Transaction) -> Transaction:
        """Insert the ledger row and return it with its persisted id."""
        pass

    @abstractmethod
    async def set_stock(self, new_stock: Decimal) -> None:
        """
        Write the new balance, conditioned on the version read at start.

        Raises ConcurrentModificationError if the version no longer matches.
        """
        pass


class ITransactionStore(ABC):
    """Interface for stock balance and ledger persistence."""

    @abstractmethod
    def stock_unit_of_work(
        self, material_id: str
    ) -> AbstractAsyncContextManager[IStockUnitOfWork]:
        """
        Open a unit of work for one material.

        Commits on normal exit, rolls back on exception.
        """
        pass

    @abstractmethod
    async def get_stock(self, material_id: str) -> Decimal | None:
        """Get the current stock, or None if the material does not exist."""
        pass

    @abstractmethod
    async def list_transactions(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Transaction]:
        """List ledger rows, most recent first."""
        pass

    @abstractmethod
    async def count_transactions(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
    ) -> int:
        """Count ledger rows matching the same filter as list_transactions."""
        pass
