"""
StayFrame Editor Server
========================

FastAPI server for the quote, meme and reel template editors.

Features:
- One template edit engine per editor session
- Property editing with coercion and clamping
- Proportional canvas re-layout across size presets
- Unsplash photo search proxy for image elements
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config.settings import Settings

settings = Settings.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Import session manager and services
from .canvas.session_manager import SessionManager
from .services.image_search_client import ImageSearchClient

# Import API routers
from .api import template_routes, element_routes, image_routes
from .config.canvas_presets import list_presets


# Shared service instances
session_manager: SessionManager = None
image_search_client: ImageSearchClient = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global session_manager, image_search_client

    logger.info("[STAYFRAME] Starting up...")

    session_manager = SessionManager(sessions_dir=settings.sessions_dir)
    image_search_client = ImageSearchClient.from_settings(settings)

    # Inject into route modules
    template_routes.session_manager = session_manager
    image_routes.image_search_client = image_search_client

    logger.info("[STAYFRAME] Services initialized")

    yield

    logger.info("[STAYFRAME] Shutting down...")
    for session_id in session_manager.list_sessions():
        session_manager.save_session(session_id)


# Create FastAPI app
app = FastAPI(
    title="StayFrame Editor",
    description="Template editing engine for quote, meme and reel designs",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(template_routes.router)
app.include_router(element_routes.router)
app.include_router(image_routes.router)


@app.get("/")
async def root():
    """Return API info."""
    return {
        "service": "StayFrame Editor",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "sessions": "/api/sessions",
            "state": "/api/sessions/{session_id}/state",
            "canvas": "/api/sessions/{session_id}/canvas",
            "elements": "/api/sessions/{session_id}/elements/{element_id}",
            "presets": "/api/presets",
            "images": "/api/images/search"
        },
        "presets": len(list_presets(include_custom=False))
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "stayframe-editor",
        "image_search_configured": bool(settings.unsplash_access_key)
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stayframe.server:app",
        host="0.0.0.0",
        port=8080,
        reload=True
    )
