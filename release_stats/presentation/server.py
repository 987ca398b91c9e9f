"""
Release Stats API - FastAPI application

Serves per-organization release statistics as JSON or CSV.

Endpoints:
    GET /organizations?sort=<field>&order=<dir>
    GET /organizations.csv?sort=<field>&order=<dir>
    GET /health
    GET /
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from .. import __version__
from ..config import ServiceConfig, load_config
from ..errors import ReleaseStatsError
from ..ingestion import ReleaseSource, build_source
from ..pipeline import run_pipeline
from .serializers import to_csv, to_json

logger = logging.getLogger(__name__)

SORT_DESCRIPTION = "release_count, total_labor_hours, or anything else for organization"
ORDER_DESCRIPTION = "desc for descending, anything else for ascending"


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    source: str
    version: str


def get_source(request: Request) -> ReleaseSource:
    """Release source attached to the running application."""
    return request.app.state.source


def create_app(
    source: Optional[ReleaseSource] = None,
    config: Optional[ServiceConfig] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        source: Release source to serve; built from config when omitted
        config: Service configuration; loaded from the environment when omitted

    Returns:
        Configured FastAPI app
    """
    if source is None:
        source = build_source(config or load_config())

    app = FastAPI(
        title="Release Stats Service",
        description="Per-organization statistics over code.json software releases",
        version=__version__
    )
    app.state.source = source

    @app.exception_handler(ReleaseStatsError)
    async def release_stats_error_handler(request: Request, exc: ReleaseStatsError):
        logger.error(f"{request.url.path} failed ({exc.kind}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/organizations")
    def list_organizations(
        sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
        order: Optional[str] = Query(None, description=ORDER_DESCRIPTION),
        release_source: ReleaseSource = Depends(get_source)
    ):
        """Aggregated organizations as a pretty-printed JSON document."""
        summaries = run_pipeline(release_source, sort, order)
        return Response(content=to_json(summaries), media_type="application/json")

    @app.get("/organizations.csv")
    def list_organizations_csv(
        sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
        order: Optional[str] = Query(None, description=ORDER_DESCRIPTION),
        release_source: ReleaseSource = Depends(get_source)
    ):
        """Aggregated organizations as CSV, one row per organization."""
        summaries = run_pipeline(release_source, sort, order)
        return Response(content=to_csv(summaries), media_type="text/csv")

    @app.get("/health", response_model=HealthResponse)
    def health_check(release_source: ReleaseSource = Depends(get_source)):
        return HealthResponse(status="healthy", source=release_source.name, version=__version__)

    @app.get("/")
    def root():
        """Root endpoint with service information."""
        return {
            "service": "Release Stats Service",
            "version": __version__,
            "endpoints": {
                "organizations": "/organizations?sort=<field>&order=<dir>",
                "organizations_csv": "/organizations.csv?sort=<field>&order=<dir>",
                "health": "/health"
            }
        }

    logger.info(f"Release Stats API ready (source={source.name})")
    return app


def main() -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger.info(f"Starting Release Stats API on http://{config.api_host}:{config.api_port}")
    uvicorn.run(
        create_app(config=config),
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
