"""FastAPI app, CORS, request logging, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from tunevault.config import LOG_LEVEL, validate_config

# Configure logging in the worker process (uvicorn --reload spawns a fresh one)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)

from tunevault.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from tunevault.api.routes import library, media, system

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_config()
    logger.info("Library API ready")
    yield


app = FastAPI(
    title="TuneVault API",
    description="Album listing and audio/image streaming from an object store",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    client = request.client.host if request.client else "-"
    logger.info("%s %s from %s", request.method, request.url.path, client)
    return await call_next(request)


app.include_router(system.router, tags=["system"])
app.include_router(library.router, tags=["library"])
app.include_router(media.router, tags=["media"])
