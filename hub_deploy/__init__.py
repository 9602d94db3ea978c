"""Hub Deploy - build the Hub Chat image and deploy it to Cloud Run.

Wraps docker buildx, Cloud Build and the gcloud CLI into one
prerequisite -> build -> deploy -> verify pipeline.
"""

from .__version__ import __version__, __version_info__, __license__

# Exceptions
from .api.exceptions import (
    HubDeployError,
    ConfigError,
    PrerequisiteError,
    MissingArtifactError,
    ExternalCommandError,
)

# Core API
from .api.deployer import Deployer, deploy

# Data models
from .models import (
    BuildStrategy,
    ImageReference,
    RunConfig,
    TargetSettings,
    DeploymentOutcome,
    ProbeResult,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Deployer",

    # Core API functions
    "deploy",

    # Data models
    "BuildStrategy",
    "ImageReference",
    "RunConfig",
    "TargetSettings",
    "DeploymentOutcome",
    "ProbeResult",

    # Exceptions
    "HubDeployError",
    "ConfigError",
    "PrerequisiteError",
    "MissingArtifactError",
    "ExternalCommandError",
]
