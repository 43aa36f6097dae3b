"""
FastAPI application for the environmental risk portal.

Thin JSON API over the search pipeline. Presentation (forms, badges,
layout) lives in the frontend and consumes these responses.

Production deployment configuration via environment variables.
"""

import logging
import os
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core import (
    InvalidIdentifier,
    PropertySearchService,
    RiskAssessmentMismatch,
    SearchError,
    extract_municipality,
    format_input,
    matches_strict_format,
    validate_fastighetsbeteckning,
)
from reporting.export import ReportFormatError, build_report, parse_report, report_filename
from sources import BaseEnvironmentalSource, create_source
from utils.config import Config

logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

APP_VERSION = "0.1.0"

# Production mode detection
IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

# CORS configuration - explicit origins only in production
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:5173", "http://localhost:8000", "http://127.0.0.1:8000"]

# Debug mode - NEVER enabled in production
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true" and not IS_PRODUCTION


# =============================================================================
# API Request/Response Models
# =============================================================================

class SearchRequest(BaseModel):
    """Request body for a property search."""
    fastighetsbeteckning: str


class ValidationResponse(BaseModel):
    """Input hints for the search form."""
    valid: bool
    strict_format: bool
    formatted: str
    municipality: Optional[str] = None


def _error_detail(error: SearchError) -> Dict[str, Any]:
    """User-facing error body; the frontend offers a retry when allowed."""
    return {"message": error.user_message, "retryable": error.retryable}


def create_app(source: Optional[BaseEnvironmentalSource] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        source: Data source to search against (default: from Config)
    """
    app = FastAPI(
        title="Miljödataportalen",
        description="Environmental risk reports for Swedish property designations",
        version=APP_VERSION,
        # Production settings: disable docs/redoc for private deployment
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=DEBUG_MODE,
    )

    # Healthcheck endpoints: synchronous, no IO
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    if source is None:
        source = create_source(Config.load())
    search_service = PropertySearchService(source)
    logger.info("Search service using %s", type(source).__name__)

    @app.get("/api/validate", response_model=ValidationResponse)
    async def validate(q: str = Query("", description="Raw search input")):
        """Validation and formatting hints for the search form."""
        formatted = format_input(q)
        valid = validate_fastighetsbeteckning(formatted)
        return ValidationResponse(
            valid=valid,
            strict_format=matches_strict_format(formatted),
            formatted=formatted,
            municipality=extract_municipality(formatted) if valid else None,
        )

    @app.post("/api/search")
    async def search(request_data: SearchRequest):
        """
        Search a property and return its environmental record.

        Returns:
            - 200 with {"property": ..., "environmental": ...}
            - 400 when the designation is rejected
            - 503 when the data source fails

            Error details are {"message": ..., "retryable": ...}.
        """
        try:
            result = await search_service.search(request_data.fastighetsbeteckning)
        except InvalidIdentifier as e:
            raise HTTPException(status_code=400, detail=_error_detail(e))
        except SearchError as e:
            raise HTTPException(status_code=503, detail=_error_detail(e))

        return result.to_dict()

    @app.post("/api/export")
    async def export(document: Dict[str, Any] = Body(...)):
        """
        Export a search result as a downloadable report.

        The risk assessment in the submitted document must match the one
        recomputed from its soil level and counts.
        """
        try:
            result, _ = parse_report(document)
        except RiskAssessmentMismatch as e:
            raise HTTPException(status_code=422, detail=str(e))
        except ReportFormatError as e:
            raise HTTPException(status_code=422, detail=str(e))

        filename = report_filename(result.property.fastighetsbeteckning)
        return JSONResponse(
            build_report(result),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": APP_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
            "source": type(source).__name__,
        }

    return app


# Create app instance for uvicorn
app = create_app()
