"""HTTP routes, grouped by resource."""

from .matches import router as matches_router
from .innings import router as innings_router
from .ledgers import router as ledgers_router

__all__ = ["matches_router", "innings_router", "ledgers_router"]
