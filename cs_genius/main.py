import logging
from typing import Optional

from fastapi import FastAPI

from cs_genius import __version__
from cs_genius.config import get_settings
from cs_genius.api.routes import audit, dashboard, draft, extraction, knowledge, requests
from cs_genius.services.app_state import AppState, create_app_state

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("cs_genius")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """
    Build the API. The app owns the knowledge base state for its lifetime.

    Args:
        state: Pre-built state (tests); defaults to a fresh, optionally seeded one
    """
    app = FastAPI(
        title=settings.app_name,
        description="Customer-support knowledge base, chat audit and reply drafting",
        version=__version__,
    )
    app.state.cs_genius = state or create_app_state(settings)

    # Include routers
    app.include_router(knowledge.router, prefix="/api/knowledge", tags=["Knowledge Base"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
    app.include_router(extraction.router, prefix="/api/extraction", tags=["Extraction"])
    app.include_router(audit.router, prefix="/api/audit", tags=["Chat Audit"])
    app.include_router(draft.router, prefix="/api/draft", tags=["Smart Drafter"])
    app.include_router(requests.router, prefix="/api/requests", tags=["Request State"])

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "endpoints": {
                "knowledge": "/api/knowledge",
                "dashboard": "/api/dashboard",
                "extraction": "/api/extraction",
                "audit": "/api/audit",
                "draft": "/api/draft",
                "requests": "/api/requests",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": settings.app_name}

    return app


app = create_app()
