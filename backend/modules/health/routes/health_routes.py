"""
Health check and service info endpoints.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError

from core.database import check_connection
from ..schemas.health_schemas import HealthCheckResponse, HealthStatus, ServiceInfo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/", response_model=ServiceInfo)
async def service_info(request: Request):
    """List the API's endpoints. Publicly accessible."""
    return ServiceInfo(
        message="Sweet Shop Management API",
        version=request.app.version,
        endpoints={
            "health": {"check": "GET /health"},
            "auth": {
                "register": "POST /api/auth/register",
                "login": "POST /api/auth/login",
                "me": "GET /api/auth/me (requires auth)",
            },
            "sweets": {
                "getAll": "GET /api/sweets (requires auth)",
                "getById": "GET /api/sweets/:id (requires auth)",
                "search": "GET /api/sweets/search?name=&category=&minPrice=&maxPrice= (requires auth)",
                "create": "POST /api/sweets (requires admin)",
                "update": "PUT /api/sweets/:id (requires admin)",
                "delete": "DELETE /api/sweets/:id (requires admin)",
                "purchase": "POST /api/sweets/:id/purchase (requires auth)",
                "restock": "POST /api/sweets/:id/restock (requires admin)",
            },
        },
    )


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, response: Response):
    """
    Basic health check endpoint.

    Reports 503 when the database cannot be reached.
    """
    started = time.perf_counter()
    try:
        check_connection(request.app.state.engine)
        database = HealthStatus.HEALTHY
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        database = HealthStatus.UNHEALTHY
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthCheckResponse(
        status=database,
        database=database,
        response_time_ms=round((time.perf_counter() - started) * 1000, 2),
        timestamp=datetime.now(timezone.utc),
        version=request.app.version,
    )
