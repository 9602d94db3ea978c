"""Configuration management service"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Any, Union

import yaml

from ..api.exceptions import ConfigError
from ..models.config import BuildStrategy, RunConfig, TargetSettings
from ..utils.git_utils import get_short_commit
from ..constants import (
    DEFAULT_TAG_PREFIX,
    ENV_CONFIG_PATH,
    ENV_PROJECT_ID,
    ENV_REGION,
    ENV_SERVICE_NAME,
    ENV_REGISTRY,
    PROJECT_CONFIG_FILE,
    TAG_PATTERN,
)

logger = logging.getLogger(__name__)

# Environment variable -> settings field
ENV_OVERRIDES = {
    ENV_PROJECT_ID: "project_id",
    ENV_REGION: "region",
    ENV_SERVICE_NAME: "service_name",
    ENV_REGISTRY: "registry",
}


def resolve_tag(tag: Optional[str], default_tag: str) -> str:
    """Return the image tag to use

    A missing tag, or one that looks like an option flag, falls back to
    ``default_tag``.
    """
    if not tag or tag.startswith("--"):
        return default_tag
    return tag


class ConfigService:
    """Service for assembling the run configuration"""

    def __init__(self,
                 project_root: Optional[Union[str, Path]] = None,
                 config_path: Optional[Union[str, Path]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """Initialize config service

        Args:
            project_root: Directory holding the build context and git checkout
            config_path: Explicit config file (must exist when given)
            environ: Environment mapping, defaults to ``os.environ``
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.environ = os.environ if environ is None else environ
        self._explicit_config = config_path or self.environ.get(ENV_CONFIG_PATH)
        self._settings: Optional[TargetSettings] = None

    @property
    def config_path(self) -> Path:
        """Config file location (explicit path or the project default)"""
        if self._explicit_config:
            return Path(self._explicit_config).expanduser()
        return self.project_root / PROJECT_CONFIG_FILE

    @property
    def settings(self) -> TargetSettings:
        """Get target settings (lazy load)"""
        if self._settings is None:
            self._settings = self.load_settings()
        return self._settings

    def load_file(self) -> Dict[str, Any]:
        """Load overrides from the YAML config file

        Returns:
            Parsed mapping, empty when the default file is absent

        Raises:
            ConfigError: If an explicit file is missing or the YAML is invalid
        """
        path = self.config_path
        if not path.exists():
            if self._explicit_config:
                raise ConfigError(f"Configuration file not found: {path}")
            return {}

        logger.info("Loading configuration from %s", path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")
        return data

    def load_settings(self) -> TargetSettings:
        """Merge defaults, config file and environment overrides

        Returns:
            Validated target settings

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        data = self.load_file()

        for env_name, field_name in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                logger.debug("Override %s from %s", field_name, env_name)
                data[field_name] = value

        try:
            return TargetSettings.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def get_build_hash(self) -> str:
        """Short commit hash of the project checkout

        Raises:
            ConfigError: If git is unavailable or this is not a checkout
        """
        build_hash = get_short_commit(self.project_root)
        if not build_hash:
            raise ConfigError(
                f"Cannot determine git commit hash in {self.project_root}. "
                "Run from a git checkout with git installed."
            )
        return build_hash

    def build_run_config(self,
                         tag: Optional[str] = None,
                         skip_build: bool = False,
                         dry_run: bool = False,
                         no_cache: bool = False,
                         strategy: Optional[str] = None) -> RunConfig:
        """Create the immutable configuration for one run

        Args:
            tag: Positional image tag, if any
            skip_build: Deploy an existing image
            dry_run: Print commands instead of running them
            no_cache: Disable the build cache
            strategy: ``local`` or ``remote``; defaults to the configured strategy

        Returns:
            RunConfig for the run

        Raises:
            ConfigError: On an invalid tag, strategy or configuration
        """
        settings = self.settings
        build_hash = self.get_build_hash()
        resolved_tag = resolve_tag(tag, f"{DEFAULT_TAG_PREFIX}-{build_hash}")

        if not TAG_PATTERN.match(resolved_tag):
            raise ConfigError(f"Invalid image tag: {resolved_tag!r}")

        try:
            build_strategy = BuildStrategy(strategy or settings.build_strategy)
        except ValueError as e:
            raise ConfigError(f"Unknown build strategy: {strategy}") from e

        return RunConfig(
            settings=settings,
            tag=resolved_tag,
            build_hash=build_hash,
            skip_build=skip_build,
            dry_run=dry_run,
            no_cache=no_cache,
            strategy=build_strategy,
        )
