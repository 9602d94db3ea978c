"""Service layer for hub-deploy"""

from .config_service import ConfigService, resolve_tag
from .cloud_run_service import CloudRunService
from .health_service import HealthService

__all__ = [
    "ConfigService",
    "resolve_tag",
    "CloudRunService",
    "HealthService",
]
