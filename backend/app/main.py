"""
Trail & Events API

FastAPI application serving hike map data and event calendar exports.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.api.v1.router import api_router
from app.features.hike_map import LibraryRegistry


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting Trail & Events API...")
    # Map/chart libraries are imported on first use, once per process
    app.state.libraries = LibraryRegistry()

    yield

    # Shutdown
    libraries = app.state.libraries
    logger.info(
        f"Shutting down (map library: {libraries.folium.state.value}, "
        f"chart library: {libraries.plotly.state.value})..."
    )


# === App Creation ===
app = FastAPI(
    title="Trail & Events API",
    description="GPX hike maps with synchronized elevation profiles, event dates and calendar exports",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


# === Static Files (GPX content) ===
if settings.content_dir.is_dir():
    app.mount("/content", StaticFiles(directory=str(settings.content_dir)), name="content")
    logger.info(f"Serving GPX files from {settings.content_dir}")
