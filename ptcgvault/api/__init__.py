from ptcgvault.api.auth import router as auth_router
from ptcgvault.api.catalog import router as catalog_router
from ptcgvault.api.decks import router as decks_router
from ptcgvault.api.health import router as health_router
from ptcgvault.api.inventory import router as inventory_router

__all__ = [
    "auth_router",
    "catalog_router",
    "decks_router",
    "health_router",
    "inventory_router",
]
