import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import (
    CORS_ORIGINS,
    LOG_LEVEL,
    SERVICE_NAME,
    SERVICE_VERSION,
    TMDB_API_KEY,
    TMDB_TIMEOUT,
)
from api.core.tmdb_client import TMDBClient
from api.routes.health import router as health_router
from api.routes.recommend import router as recommend_router

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
# Reduce noise from HTTP clients
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    _initialise_application(app)
    yield
    client = getattr(app.state, "tmdb_client", None)
    if client is not None:
        await client.aclose()
        app.state.tmdb_client = None


app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=app_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(health_router, prefix="")
app.include_router(recommend_router)


def _initialise_application(app: FastAPI) -> None:
    # Tests install their own stub client before startup.
    if getattr(app.state, "tmdb_client", None) is not None:
        return
    if TMDB_API_KEY:
        app.state.tmdb_client = TMDBClient(TMDB_API_KEY, timeout=TMDB_TIMEOUT)
    else:
        logger.warning("TMDB_API_KEY is not set; recommendations use fallback tables.")
        app.state.tmdb_client = None
