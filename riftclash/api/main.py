"""
FastAPI main application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .dependencies import get_match_service
from .routes import match, data
from .services.match_service import MatchService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    closed = get_match_service().close_all()
    logger.info("Shutdown: closed %d match rooms", closed)


app = FastAPI(
    title="Rift Clash API",
    description="Turn-based two-player lane battler served over HTTP and WebSocket",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(match.router, prefix="/api/match", tags=["Match"])
app.include_router(data.router, prefix="/api/data", tags=["Data"])


@app.get("/")
async def root():
    """API status check."""
    return {"status": "ok", "name": "Rift Clash API", "version": "1.0.0"}


@app.get("/health")
async def health_check(service: MatchService = Depends(get_match_service)):
    """Health check with the number of live matches."""
    return {"status": "healthy", "matches": len(service.rooms)}
