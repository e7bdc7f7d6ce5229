"""
FastAPI Application Entry Point
================================

Main application initialization and wiring.
Run with: uvicorn sas_export.app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sas_export.api.routes import router
from sas_export.app.config import VERSION, APP_NAME, LOG_LEVEL, LOG_FORMAT
from sas_export.app.exceptions import global_exception_handler


# =============================================================================
# LOGGING
# =============================================================================

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title=APP_NAME,
    description="Statistical file to CSV and SQL DDL export API",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(Exception, global_exception_handler)


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(router, tags=["Export"])


# =============================================================================
# ROOT
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "csv": "POST /export/csv",
            "schema": "POST /export/schema",
            "metadata": "POST /export/metadata"
        }
    }
