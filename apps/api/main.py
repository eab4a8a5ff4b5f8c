"""
Photo Archive Bridge - FastAPI application
Serves bilingual archive pages and embeddable fragments from the content store.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings, store_identity
from routers import cache, fragments, health, pages
from services.query_cache import build_query_cache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    print("🚀 Starting Photo Archive Bridge...")
    if not store_identity().is_complete:
        print("⚠️ Content store not configured; pages will show a configuration notice.")
    app.state.query_cache = build_query_cache()
    print(f"🗄️ Query cache backend: {app.state.query_cache.backend.name}")
    yield
    # Shutdown
    print("👋 Shutting down Photo Archive Bridge...")


app = FastAPI(
    title="Photo Archive Bridge",
    description="Bilingual (English/Georgian) photo archive views rendered from the content store",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers; pages last so its catch-all paths do not shadow the others
app.include_router(health.router, tags=["Health"])
app.include_router(cache.router, prefix="/cache", tags=["Cache"])
app.include_router(fragments.router, prefix="/fragments", tags=["Fragments"])
app.include_router(pages.router, tags=["Pages"])
