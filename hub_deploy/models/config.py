"""Configuration data models"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Any

from ..constants import (
    DEFAULT_PROJECT_ID,
    DEFAULT_REGION,
    DEFAULT_SERVICE_NAME,
    DEFAULT_REGISTRY,
    DEFAULT_CUSTOM_URL,
    DEFAULT_PLATFORM,
    DEFAULT_BUILD_CONTEXT,
    DEFAULT_CLOUDBUILD_CONFIG,
    DEFAULT_PROBE_TIMEOUT,
)


class BuildStrategy(Enum):
    """Where the container image gets built"""
    LOCAL = "local"    # docker buildx on this machine, orchestrator deploys
    REMOTE = "remote"  # Cloud Build builds, pushes and deploys


@dataclass(frozen=True)
class ImageReference:
    """Registry path plus tag"""

    registry: str
    tag: str

    @property
    def registry_host(self) -> str:
        """Host part of the registry path, e.g. us-central1-docker.pkg.dev"""
        return self.registry.split("/", 1)[0]

    def __str__(self) -> str:
        return f"{self.registry}:{self.tag}"


@dataclass(frozen=True)
class TargetSettings:
    """Deployment target and tool settings that do not depend on the CLI flags

    Values come from the built-in defaults, optionally overridden by the
    project config file and environment variables.
    """

    project_id: str = DEFAULT_PROJECT_ID
    region: str = DEFAULT_REGION
    service_name: str = DEFAULT_SERVICE_NAME
    registry: str = DEFAULT_REGISTRY
    custom_url: str = DEFAULT_CUSTOM_URL
    platform: str = DEFAULT_PLATFORM
    build_context: str = DEFAULT_BUILD_CONTEXT
    cloudbuild_config: str = DEFAULT_CLOUDBUILD_CONFIG
    build_strategy: str = BuildStrategy.LOCAL.value
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT

    def __post_init__(self):
        """Validate settings, coercing scalar YAML values to strings"""
        for f in fields(self):
            if f.type is not str:
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise ValueError(f"'{f.name}' must be a string, got {value!r}")
            if not isinstance(value, str):
                object.__setattr__(self, f.name, str(value))

        BuildStrategy(self.build_strategy)
        if isinstance(self.probe_timeout, bool) or not isinstance(self.probe_timeout, (int, float)):
            raise ValueError(f"'probe_timeout' must be a number, got {self.probe_timeout!r}")
        if self.probe_timeout <= 0:
            raise ValueError("probe_timeout must be positive")
        for name in ("project_id", "region", "service_name", "registry"):
            if not getattr(self, name):
                raise ValueError(f"'{name}' must not be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TargetSettings':
        """Create from dictionary, rejecting unknown keys"""
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


@dataclass(frozen=True)
class RunConfig:
    """Parameters for a single deployment run

    Built once from settings and parsed arguments, then threaded through
    every stage unchanged.
    """

    settings: TargetSettings
    tag: str
    build_hash: str
    skip_build: bool = False
    dry_run: bool = False
    no_cache: bool = False
    strategy: BuildStrategy = BuildStrategy.LOCAL

    @property
    def project_id(self) -> str:
        return self.settings.project_id

    @property
    def region(self) -> str:
        return self.settings.region

    @property
    def service_name(self) -> str:
        return self.settings.service_name

    @property
    def image(self) -> ImageReference:
        return ImageReference(registry=self.settings.registry, tag=self.tag)

    @property
    def is_remote_build(self) -> bool:
        """Cloud Build handles build and deploy for this run"""
        return self.strategy is BuildStrategy.REMOTE and not self.skip_build

    @property
    def total_stages(self) -> int:
        """Stage count shown in the [n/N] headers"""
        return 3 if self.is_remote_build else 4
