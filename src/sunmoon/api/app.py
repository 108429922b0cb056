"""FastAPI application factory.

Creates and configures the FastAPI application with all routes.

## Usage

```python
from sunmoon.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

## Configuration

The app is configured via environment variables. See `sunmoon.config`
for available settings.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sunmoon.astronomy.registry import AngleRegistry, get_default_registry
from sunmoon.config import get_settings
from sunmoon.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def create_app(registry: AngleRegistry | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        registry: Thresholds served and extended by this app (default
            registry if omitted)

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Sun and moon positions, rise/set/twilight times and moon phases",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.registry = registry if registry is not None else get_default_registry()

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
        logger.warning(f"Invalid argument on {request.url.path}: {exc}")
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    # Include routers
    from sunmoon.api.routes import moon, registry as registry_routes, sun

    app.include_router(sun.router, prefix="/api/sun", tags=["Sun"])
    app.include_router(moon.router, prefix="/api/moon", tags=["Moon"])
    app.include_router(registry_routes.router, prefix="/api/registry", tags=["Registry"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    logger.info(f"Created {settings.app_name} v{settings.app_version}")
    return app
