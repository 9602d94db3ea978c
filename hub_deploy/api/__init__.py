# hub_deploy/api/__init__.py
"""API layer for hub-deploy"""

from .exceptions import (
    HubDeployError,
    ConfigError,
    PrerequisiteError,
    MissingArtifactError,
    ExternalCommandError,
)
from .deployer import Deployer, deploy

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy",

    # Exceptions
    "HubDeployError",
    "ConfigError",
    "PrerequisiteError",
    "MissingArtifactError",
    "ExternalCommandError",
]
