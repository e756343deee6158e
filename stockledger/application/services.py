"""
Service factory functions for dependency injection.

Wires the SQLite stores to the core services. Use cases and API
dependencies obtain StockLedger, MaterialCatalog and SupplierCatalog
from here.
"""

from typing import TYPE_CHECKING

from stockledger.config import get_settings
from stockledger.core.services import MaterialCatalog, StockLedger, SupplierCatalog

if TYPE_CHECKING:
    from stockledger.core.interfaces import (
        IAuthorizationContext,
        IMaterialStore,
        ISupplierStore,
        ITransactionStore,
    )


# Singleton service instances
_stock_ledger: StockLedger | None = None
_material_catalog: MaterialCatalog | None = None
_supplier_catalog: SupplierCatalog | None = None


async def get_stock_ledger(
    transaction_store: "ITransactionStore | None" = None,
    material_store: "IMaterialStore | None" = None,
    authorization: "IAuthorizationContext | None" = None,
    supplier_store: "ISupplierStore | None" = None,
) -> StockLedger:
    """
    Get or create the StockLedger.

    The singleton is shared across requests: its per-material locks only
    serialize callers that go through the same instance. Passing any store
    override builds a fresh, uncached ledger.

    Args:
        transaction_store: Optional transaction store override
        material_store: Optional material store override
        authorization: Optional ownership resolver override
        supplier_store: Optional supplier lookup override

    Returns:
        Configured StockLedger
    """
    global _stock_ledger

    overridden = any(
        dep is not None
        for dep in (transaction_store, material_store, authorization, supplier_store)
    )
    if _stock_ledger is not None and not overridden:
        return _stock_ledger

    # Lazy import infrastructure
    from stockledger.infrastructure.storage.sqlite import (
        get_material_store,
        get_project_store,
        get_supplier_store,
        get_transaction_store,
    )

    ledger_settings = get_settings().ledger
    ledger = StockLedger(
        transaction_store=transaction_store or await get_transaction_store(),
        material_store=material_store or await get_material_store(),
        authorization=authorization or await get_project_store(),
        lock_timeout=ledger_settings.lock_timeout,
        default_page_size=ledger_settings.default_page_size,
        max_page_size=ledger_settings.max_page_size,
        notes_max_length=ledger_settings.notes_max_length,
        supplier_store=supplier_store or await get_supplier_store(),
    )

    if not overridden:
        _stock_ledger = ledger

    return ledger


async def get_material_catalog(
    material_store: "IMaterialStore | None" = None,
    authorization: "IAuthorizationContext | None" = None,
) -> MaterialCatalog:
    """Get or create the MaterialCatalog."""
    global _material_catalog

    overridden = material_store is not None or authorization is not None
    if _material_catalog is not None and not overridden:
        return _material_catalog

    from stockledger.infrastructure.storage.sqlite import (
        get_material_store,
        get_project_store,
    )

    catalog = MaterialCatalog(
        material_store=material_store or await get_material_store(),
        authorization=authorization or await get_project_store(),
    )

    if not overridden:
        _material_catalog = catalog

    return catalog


async def get_supplier_catalog(
    supplier_store: "ISupplierStore | None" = None,
) -> SupplierCatalog:
    """Get or create the SupplierCatalog."""
    global _supplier_catalog

    if _supplier_catalog is not None and supplier_store is None:
        return _supplier_catalog

    from stockledger.infrastructure.storage.sqlite import get_supplier_store

    catalog = SupplierCatalog(supplier_store or await get_supplier_store())
    if supplier_store is None:
        _supplier_catalog = catalog

    return catalog


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _stock_ledger, _material_catalog, _supplier_catalog
    _stock_ledger = None
    _material_catalog = None
    _supplier_catalog = None
