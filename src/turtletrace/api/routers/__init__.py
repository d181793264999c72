"""API routers package."""

from turtletrace.api.routers.accounts import router as accounts_router
from turtletrace.api.routers.positions import router as positions_router
from turtletrace.api.routers.portfolio import router as portfolio_router
from turtletrace.api.routers.tags import router as tags_router
from turtletrace.api.routers.reviews import router as reviews_router
from turtletrace.api.routers.data import router as data_router

__all__ = [
    "accounts_router",
    "positions_router",
    "portfolio_router",
    "tags_router",
    "reviews_router",
    "data_router",
]
