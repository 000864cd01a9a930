from __future__ import annotations

from fastapi import APIRouter

from .endpoints import filters, health, metadata, phrase, symbols, usage, volumes

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(volumes.router, prefix="/volumes", tags=["volumes"])
api_router.include_router(symbols.router, prefix="/symbols", tags=["symbols"])
api_router.include_router(filters.router, prefix="/filters", tags=["filters"])
api_router.include_router(phrase.router, prefix="/phrase", tags=["phrase"])
api_router.include_router(usage.router, prefix="/usage", tags=["usage"])
api_router.include_router(metadata.router, prefix="/metadata", tags=["metadata"])
