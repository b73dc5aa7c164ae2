from .health_schemas import HealthCheckResponse, HealthStatus, ServiceInfo

__all__ = ["HealthCheckResponse", "HealthStatus", "ServiceInfo"]
