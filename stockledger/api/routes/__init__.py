"""API route modules."""

from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.inventory import router as inventory_router
from stockledger.api.routes.materials import router as materials_router
from stockledger.api.routes.suppliers import router as suppliers_router

__all__ = [
    "health_router",
    "inventory_router",
    "materials_router",
    "suppliers_router",
]
