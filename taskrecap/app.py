"""
FastAPI Application Entry Point
taskrecap API Server

Usage:
    # Development with auto-reload
    uvicorn taskrecap.app:app --reload

    # Production
    uvicorn taskrecap.app:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskrecap import __version__
from taskrecap.config.loader import get_config
from taskrecap.core.logger import get_logger
from taskrecap.handlers import register_fastapi_routes

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI application lifecycle management"""
    logger.info("========== taskrecap Starting ==========")

    try:
        config_loader = get_config()
        logger.info(f"✓ Configuration loaded: {config_loader.config_file}")

        from taskrecap.core.dashboard.manager import get_dashboard_manager

        get_dashboard_manager()
        logger.info("✓ Dashboard manager initialized")

        logger.info("========== taskrecap Ready ==========")

    except Exception as e:
        logger.error(f"Failed to initialize backend: {e}", exc_info=True)
        raise

    yield

    logger.info("========== taskrecap Shutting Down ==========")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="taskrecap API",
        description="Todoist completion analytics",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_fastapi_routes(app, prefix="/api")

    @app.get("/")
    async def root():
        """Health check endpoint"""
        return {"status": "ok", "message": "taskrecap API Server", "version": __version__}

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


app = create_app()
