"""
Pydantic schemas for the health and service-info endpoints.
"""

from pydantic import BaseModel
from typing import Dict, Optional
from datetime import datetime
from enum import Enum


class HealthStatus(str, Enum):
    """Health status values"""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthCheckResponse(BaseModel):
    """Overall health check response"""
    status: HealthStatus
    database: HealthStatus
    response_time_ms: Optional[float] = None
    timestamp: datetime
    version: str


class ServiceInfo(BaseModel):
    """Entry point listing of the public API"""
    message: str
    version: str
    endpoints: Dict[str, Dict[str, str]]
