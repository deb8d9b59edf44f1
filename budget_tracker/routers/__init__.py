"""Router aggregation: every feature router is mounted under ``/api``."""

from fastapi import APIRouter, FastAPI

from . import categories, settings, stats, transactions

router = APIRouter()
router.include_router(settings.router)
router.include_router(categories.router)
router.include_router(transactions.router)
router.include_router(stats.router)


def register_routers(app: FastAPI) -> None:
    """Attach all API routes to the FastAPI application."""

    app.include_router(router, prefix="/api")
