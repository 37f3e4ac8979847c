"""
Slidesmith - Main Application Entry Point

HTTP service for editing slide presentations with undo/redo history,
debounced autosave, and JSON/PowerPoint import and export.
"""
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from slidesmith import __version__
from slidesmith.core import get_settings, init_debug_mode, is_debug_mode, get_debug_status, setup_logging
from slidesmith.api.routes import editing, sessions, validation
from slidesmith.services import get_editor_service

# Initialize the debug mode state (after .env has been loaded)
init_debug_mode()

# Configure logging
setup_logging(logging.DEBUG if is_debug_mode() else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()

    # Startup
    logger.info(f"🚀 Starting {settings.app_name}...")
    settings.ensure_directories()

    if is_debug_mode():
        logger.info("🐛 Debug mode is \033[92mACTIVE\033[0m")

    logger.info(f"📁 Presentations directory: \033[93m{settings.presentations_dir}\033[0m")
    autosave_color = "\033[92m" if settings.autosave_enabled else "\033[91m"
    logger.info(
        f"💾 Autosave enabled: {autosave_color}{settings.autosave_enabled}\033[0m "
        f"(debounce {settings.autosave_debounce_seconds}s)"
    )

    yield

    # Shutdown: flush every open session before the loop goes away
    logger.info(f"👋 Shutting down {settings.app_name}...")
    await get_editor_service().close_all()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Slide presentation editor with undo/redo, autosave, and PPTX import/export",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(validation.router, tags=["validation"])
    app.include_router(sessions.router, tags=["sessions"])
    app.include_router(editing.router, tags=["editing"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        debug_status = get_debug_status()

        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "open_sessions": get_editor_service().session_count,
            "autosave_enabled": settings.autosave_enabled,
            "debug_mode": debug_status["debug_mode"],
            "save_count": debug_status["save_count"],
        }

    @app.get("/api/config")
    async def get_public_config():
        """Get public configuration."""
        return {
            "app_name": settings.app_name,
            "autosave_enabled": settings.autosave_enabled,
            "autosave_debounce_seconds": settings.autosave_debounce_seconds,
            "history_limit": settings.history_limit,
            "max_import_bytes": settings.max_import_bytes,
            "import_types": ["json", "pptx"],
        }

    # Only register debug endpoint if debug mode is enabled
    if is_debug_mode():
        @app.get("/api/debug")
        async def get_debug_info():
            """Get debug mode status and save count."""
            return get_debug_status()

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "slidesmith.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
