"""
Main application module for the polygon offset backend.

This file sets up the FastAPI application, configures CORS so browser
clients can make cross-origin requests and exposes a simple health
check endpoint.  The offset router is included under the ``/api``
namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_offset import router as offset_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="polyoffset")

    # Allow all origins by default.  In production you should restrict
    # this to the domains that are allowed to access your API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(offset_router, prefix="/api", tags=["offset"])

    return app


app = create_app()
