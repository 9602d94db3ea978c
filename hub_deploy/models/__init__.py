# hub_deploy/models/__init__.py
"""Data models for hub-deploy"""

from .config import BuildStrategy, ImageReference, RunConfig, TargetSettings
from .result import DeploymentOutcome, OperationStatus, ProbeResult, StageResult

__all__ = [
    # Config models
    "BuildStrategy",
    "ImageReference",
    "RunConfig",
    "TargetSettings",

    # Result models
    "DeploymentOutcome",
    "OperationStatus",
    "ProbeResult",
    "StageResult",
]
