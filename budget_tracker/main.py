from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import init_db
from .logging_setup import configure_logging, get_logger
from .routers import register_routers

_logger = get_logger("budget_tracker.main")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    init_db()
    _logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
    yield


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count", "Content-Disposition"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


register_routers(app)


def run() -> None:
    """Serve the API with uvicorn (``budget-tracker`` console script)."""
    import uvicorn

    uvicorn.run("budget_tracker.main:app", host="127.0.0.1", port=8000)
