"""
Stock ledger service.

The only code path allowed to change a material's stock. Every movement
is a single read-modify-write executed while holding:
- the in-process lock for the material (serializes same-material calls)
- a storage unit of work (write transaction + version-guarded update)

Validation order for register_transaction, first failure wins:
quantity, transaction type, notes, material, ownership, supplier,
available stock.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from stockledger.config import get_logger
from stockledger.core.entities.material import Material
from stockledger.core.entities.transaction import (
    NOTES_MAX_LENGTH,
    RegisterTransactionResult,
    Transaction,
    TransactionPage,
    TxType,
)
from stockledger.core.exceptions import (
    AccessDeniedError,
    InsufficientStockError,
    InvalidInputError,
    MaterialNotFoundError,
    NegativeStockRejectedError,
    StockLimitExceededError,
    StorageUnavailableError,
)
from stockledger.core.interfaces.authorization import IAuthorizationContext
from stockledger.core.interfaces.material_store import IMaterialStore
from stockledger.core.interfaces.supplier_store import ISupplierStore
from stockledger.core.interfaces.transaction_store import ITransactionStore
from stockledger.core.services.keyed_lock import KeyedLock, LockTimeoutError
from stockledger.core.services.stock_impact import (
    MAX_AMOUNT,
    compute_new_stock,
    parse_quantity,
    parse_tx_type,
)

logger = get_logger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class StockLedger:
    """Registers stock movements and answers stock/history queries."""

    def __init__(
        self,
        transaction_store: ITransactionStore,
        material_store: IMaterialStore,
        authorization: IAuthorizationContext,
        lock_timeout: float | None = 10.0,
        default_page_size: int = 50,
        max_page_size: int = 200,
        notes_max_length: int = NOTES_MAX_LENGTH,
        supplier_store: ISupplierStore | None = None,
    ):
        self._transaction_store = transaction_store
        self._material_store = material_store
        self._authorization = authorization
        self._locks = KeyedLock(timeout=lock_timeout)
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._notes_max_length = notes_max_length
        self._supplier_store = supplier_store

    @staticmethod
    def _ensure_usable(
        material: Material | None, material_id: str, project_id: str
    ) -> Material:
        # Absent, foreign and archived materials are reported identically
        if material is None or not material.belongs_to(project_id) or not material.is_active:
            raise MaterialNotFoundError(material_id)
        return material

    async def _ensure_supplier(self, supplier_id: str) -> None:
        # Without a supplier catalog no reference can be resolved
        if self._supplier_store is None or (
            await self._supplier_store.get_supplier(supplier_id) is None
        ):
            raise InvalidInputError("supplier_id", "unknown supplier", supplier_id)

    async def register_transaction(
        self,
        material_id: str,
        project_id: str,
        tx_type: Any,
        quantity: Any,
        actor_user_id: str | None,
        supplier_id: str | None = None,
        notes: str | None = None,
    ) -> RegisterTransactionResult:
        """
        Apply one movement to a material's stock and append it to the ledger.

        Args:
            material_id: Material to move
            project_id: Project the caller believes owns the material
            tx_type: "ENTRY", "USAGE" or "ADJUSTMENT" (case-sensitive)
            quantity: Positive amount; rounded to 3 fractional digits
            actor_user_id: Acting user, supplied by the authorization layer
            supplier_id: Optional supplier; must exist in the supplier catalog
            notes: Optional free text, at most 400 characters

        Returns:
            Balances around the movement and the persisted transaction id

        Raises:
            InvalidQuantityError, InvalidTransactionTypeError, InvalidInputError,
            MaterialNotFoundError, AccessDeniedError, InsufficientStockError,
            NegativeStockRejectedError, StockLimitExceededError,
            ConcurrentModificationError, StorageUnavailableError
        """
        qty = parse_quantity(quantity)
        kind = parse_tx_type(tx_type)
        if notes is not None and len(notes) > self._notes_max_length:
            raise InvalidInputError(
                "notes",
                f"must be at most {self._notes_max_length} characters",
                f"{len(notes)} characters",
            )

        material = await self._material_store.get_material(material_id)
        self._ensure_usable(material, material_id, project_id)

        if not actor_user_id or not await self._authorization.is_project_owner(
            actor_user_id, project_id
        ):
            logger.warning(
                "transaction_access_denied",
                material_id=material_id,
                project_id=project_id,
                actor_user_id=actor_user_id,
            )
            raise AccessDeniedError(material_id, project_id)

        if supplier_id is not None:
            await self._ensure_supplier(supplier_id)

        try:
            async with self._locks.hold(material_id):
                async with self._transaction_store.stock_unit_of_work(material_id) as unit:
                    # Re-read under lock: status, project and stock may have moved
                    locked = self._ensure_usable(unit.material, material_id, project_id)
                    previous_stock = locked.stock

                    if kind == TxType.USAGE and previous_stock < qty:
                        logger.info(
                            "insufficient_stock",
                            material_id=material_id,
                            current_stock=str(previous_stock),
                            requested=str(qty),
                        )
                        raise InsufficientStockError(material_id, previous_stock, qty)

                    new_stock = compute_new_stock(kind, qty, previous_stock)
                    if new_stock < 0:
                        logger.error(
                            "negative_stock_rejected",
                            material_id=material_id,
                            attempted_stock=str(new_stock),
                        )
                        raise NegativeStockRejectedError(material_id, new_stock)
                    if new_stock >= MAX_AMOUNT:
                        logger.warning(
                            "stock_limit_exceeded",
                            material_id=material_id,
                            attempted_stock=str(new_stock),
                        )
                        raise StockLimitExceededError(material_id, new_stock, MAX_AMOUNT)

                    transaction = await unit.append(
                        Transaction(
                            material_id=material_id,
                            tx_type=kind,
                            quantity=qty,
                            supplier_id=supplier_id,
                            notes=notes,
                            previous_stock=previous_stock,
                            new_stock=new_stock,
                            tx_date=datetime.now(UTC),
                        )
                    )
                    await unit.set_stock(new_stock)
        except LockTimeoutError:
            logger.warning(
                "material_lock_timeout",
                material_id=material_id,
                timeout=self._locks.timeout,
            )
            raise StorageUnavailableError("material lock") from None

        logger.info(
            "transaction_registered",
            transaction_id=transaction.id,
            material_id=material_id,
            tx_type=kind.value,
            quantity=str(qty),
            previous_stock=str(previous_stock),
            new_stock=str(new_stock),
        )

        return RegisterTransactionResult(
            transaction_id=transaction.id,  # type: ignore[arg-type]
            material_id=material_id,
            new_stock=new_stock,
            previous_stock=previous_stock,
            transaction_quantity=qty,
            transaction_type=kind,
            tx_date=transaction.tx_date,
        )

    async def get_stock(self, material_id: str) -> Decimal:
        """Get the current stock of a material."""
        stock = await self._transaction_store.get_stock(material_id)
        if stock is None:
            raise MaterialNotFoundError(material_id)
        return stock

    def _validate_listing(
        self,
        from_date: datetime | None,
        to_date: datetime | None,
        page: int,
        page_size: int,
    ) -> None:
        if page < 1:
            raise InvalidInputError("page", "must be >= 1", page)
        if page_size < 1 or page_size > self._max_page_size:
            raise InvalidInputError(
                "page_size", f"must be between 1 and {self._max_page_size}", page_size
            )
        if from_date is not None and to_date is not None and from_date > to_date:
            raise InvalidInputError("from_date", "must not be after to_date", from_date)

    async def list_transactions(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> TransactionPage:
        """List a material's ledger, most recent first, with inclusive date bounds."""
        page_size = page_size if page_size is not None else self._default_page_size
        from_date = _as_utc(from_date)
        to_date = _as_utc(to_date)
        self._validate_listing(from_date, to_date, page, page_size)

        if await self._material_store.get_material(material_id) is None:
            raise MaterialNotFoundError(material_id)

        total = await self._transaction_store.count_transactions(
            material_id, from_date=from_date, to_date=to_date
        )
        items: list[Transaction] = []
        offset = (page - 1) * page_size
        if offset < total:
            items = await self._transaction_store.list_transactions(
                material_id,
                from_date=from_date,
                to_date=to_date,
                limit=page_size,
                offset=offset,
            )

        return TransactionPage(items=items, total=total, page=page, page_size=page_size)

    async def iter_transactions(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        page_size: int | None = None,
    ) -> AsyncIterator[Transaction]:
        """Lazily walk every page of a material's ledger, newest first."""
        page = 1
        while True:
            result = await self.list_transactions(
                material_id,
                from_date=from_date,
                to_date=to_date,
                page=page,
                page_size=page_size,
            )
            for transaction in result.items:
                yield transaction
            if not result.has_more:
                return
            page += 1
