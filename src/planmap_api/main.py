"""PLANMAP mock backend.

Stand-in for the planning backend, serving the two calls the drawing
session makes. Run with::

    python -m planmap_api
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from planmap import __version__
from planmap.config import settings
from planmap_api.routers import features
from planmap_api.store import FeatureStore


def create_app(store: Optional[FeatureStore] = None, latency: Optional[float] = None) -> FastAPI:
    """Build a mock backend app that owns ``store`` (a fresh one if omitted).

    ``latency`` overrides ``settings.mock_api_latency`` for this app.
    """
    app = FastAPI(
        title=f"{settings.app_name} mock backend",
        version=__version__,
    )
    app.state.store = store if store is not None else FeatureStore()
    app.state.latency = latency

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(features.router)

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint."""
        return {
            "status": "operational",
            "version": __version__,
            "stored_features": len(request.app.state.store),
        }

    return app


app = create_app()
