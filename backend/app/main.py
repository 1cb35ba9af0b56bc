"""FastAPI application - tagging and search engine."""

from fastapi import FastAPI

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.search import router as search_router
from backend.app.api.routes.tags import router as tags_router
from backend.app.api.routes.validation import router as validation_router
from backend.app.config import get_settings
from backend.app.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.app_version)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(search_router)
app.include_router(tags_router)
app.include_router(validation_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": settings.app_name, "version": settings.app_version}
