"""FastAPI application: Synergy Engine API.

Exposes the numeric analysis and insight lifecycle to non-Streamlit clients.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import __version__
from core.settings import configure_logging, get_settings

from .routers import analysis, providers

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Synergy Engine API",
    version=__version__,
    description="Target/bounds containment analysis with LLM insight",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
app.include_router(providers.router, prefix="/v1", tags=["providers"])


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@app.get("/")
async def root():
    return {"message": "Synergy Engine API", "docs": "/docs"}
