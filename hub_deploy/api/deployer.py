"""Deployer API for deployment operations"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..builders import BuilderFactory, ImageBuilder
from ..models import DeploymentOutcome, OperationStatus, RunConfig
from ..services import CloudRunService, ConfigService, HealthService
from ..utils.output import StageReporter
from ..utils.shell_utils import CommandRunner, format_command
from ..constants import (
    STAGE_PREREQUISITES,
    STAGE_BUILD,
    STAGE_DEPLOY,
    STAGE_VERIFY,
    MSG_PREREQUISITES_OK,
    MSG_IMAGE_PUSHED,
    MSG_IMAGE_EXISTS,
    MSG_REMOTE_BUILD_DONE,
    MSG_DEPLOYED,
    MSG_SERVICE_RESPONDING,
    MSG_SERVICE_STARTING,
    MSG_DRY_RUN_PROBE,
)
from .exceptions import ExternalCommandError, MissingArtifactError

logger = logging.getLogger(__name__)


class Deployer:
    """Runs the deployment pipeline for one RunConfig

    Stages run in order: prerequisites, build (or artifact check), deploy,
    verify. Every stage except verify raises on failure; verify only warns.
    """

    def __init__(self,
                 config: RunConfig,
                 runner: Optional[CommandRunner] = None,
                 cloud_run: Optional[CloudRunService] = None,
                 health: Optional[HealthService] = None,
                 builder: Optional[ImageBuilder] = None,
                 reporter: Optional[StageReporter] = None):
        """
        Initialize deployer

        Args:
            config: Run configuration
            runner: Command runner; built from ``config.dry_run`` if omitted
            cloud_run: gcloud wrapper
            health: HTTP probe
            builder: Image builder; chosen from ``config.strategy`` if omitted
            reporter: Console reporter
        """
        self.config = config
        self.reporter = reporter or StageReporter()
        self.runner = runner or CommandRunner(
            dry_run=config.dry_run,
            echo=self.reporter.command
        )
        self.cloud_run = cloud_run or CloudRunService(self.runner)
        self.health = health or HealthService(timeout=config.settings.probe_timeout)
        self.builder = builder or BuilderFactory.create(config.strategy, self.runner)
        self._step = 0

    def _stage(self, title: str, skipped: bool = False) -> None:
        self._step += 1
        self.reporter.stage(self._step, self.config.total_stages, title, skipped=skipped)

    def run(self) -> DeploymentOutcome:
        """
        Execute every stage

        Returns:
            DeploymentOutcome with per-stage results

        Raises:
            PrerequisiteError: If tools or authentication are missing
            MissingArtifactError: If --skip-build targets an absent image
            ExternalCommandError: If build, deploy or docker setup fails
        """
        config = self.config
        outcome = DeploymentOutcome(
            image=config.image,
            dry_run=config.dry_run,
            custom_url=config.settings.custom_url or None
        )

        self.reporter.banner(config)
        if config.dry_run:
            self.reporter.dry_run_header()

        self.check_prerequisites(outcome)
        self.build(outcome)
        self.deploy(outcome)
        self.verify(outcome)

        if config.dry_run:
            self.reporter.dry_run_footer()
        return outcome

    def check_prerequisites(self, outcome: DeploymentOutcome) -> None:
        """Tools installed, gcloud authenticated, docker wired to the registry"""
        self._stage("Checking prerequisites...")

        self.cloud_run.check_tools()
        self.cloud_run.check_auth()

        registry_host = self.config.image.registry_host
        if not self.cloud_run.docker_auth_configured(registry_host):
            self.reporter.warning("Configuring Docker for Artifact Registry...")
            self.cloud_run.configure_docker(registry_host)

        self.reporter.success(MSG_PREREQUISITES_OK)
        self.reporter.blank()
        outcome.add_stage(STAGE_PREREQUISITES, OperationStatus.SUCCESS)

    def build(self, outcome: DeploymentOutcome) -> None:
        """Build and push the image, or confirm it exists when skipping the build"""
        config = self.config

        if config.skip_build:
            self._stage("Skipping build (--skip-build)", skipped=True)
            if not config.dry_run:
                if not self.cloud_run.image_exists(config):
                    raise MissingArtifactError(str(config.image))
                self.reporter.success(MSG_IMAGE_EXISTS)
            self.reporter.blank()
            outcome.add_stage(STAGE_BUILD, OperationStatus.SKIPPED, "existing image")
            return

        if self.builder.performs_deploy:
            self._stage("Submitting build to Cloud Build...")
            self.reporter.note("Cloud Build will build, push and deploy the image.")
        else:
            self._stage(f"Building Docker image for {config.settings.platform}...")
            self.reporter.note("This may take 5-10 minutes...")
        if config.no_cache:
            self.reporter.note("[yellow](--no-cache enabled, full rebuild)[/yellow]")

        logger.info("Building %s with %s", config.image, type(self.builder).__name__)
        self.builder.build(config)

        self.reporter.success(MSG_REMOTE_BUILD_DONE if self.builder.performs_deploy
                              else MSG_IMAGE_PUSHED)
        self.reporter.blank()
        outcome.add_stage(STAGE_BUILD, OperationStatus.SUCCESS)

    def deploy(self, outcome: DeploymentOutcome) -> None:
        """Roll the image out unless Cloud Build already did"""
        if self.config.is_remote_build:
            outcome.add_stage(STAGE_DEPLOY, OperationStatus.SKIPPED, "deployed by Cloud Build")
            return

        self._stage("Deploying to Cloud Run...")
        self.cloud_run.deploy(self.config)
        self.reporter.success(MSG_DEPLOYED)
        self.reporter.blank()
        outcome.add_stage(STAGE_DEPLOY, OperationStatus.SUCCESS)

    def verify(self, outcome: DeploymentOutcome) -> None:
        """Best-effort liveness check; problems become warnings"""
        config = self.config
        self._stage("Verifying deployment...")

        if config.dry_run:
            self.runner.echo(format_command(self.cloud_run.describe_url_command(config)))
            self.runner.echo(MSG_DRY_RUN_PROBE)
            outcome.add_stage(STAGE_VERIFY, OperationStatus.SKIPPED, "dry run")
            return

        try:
            service_url = self.cloud_run.get_service_url(config)
        except ExternalCommandError as e:
            logger.debug("Service describe failed: %s", e)
            message = "Could not determine service URL"
            self.reporter.warning(f"{MSG_SERVICE_STARTING} ({message})")
            outcome.add_stage(STAGE_VERIFY, OperationStatus.WARNING, message)
            return

        if not service_url:
            message = "Service has no URL yet"
            self.reporter.warning(f"{MSG_SERVICE_STARTING} ({message})")
            outcome.add_stage(STAGE_VERIFY, OperationStatus.WARNING, message)
            return

        outcome.service_url = service_url
        probe = self.health.probe(service_url)
        outcome.probe = probe

        if probe.healthy:
            self.reporter.success(MSG_SERVICE_RESPONDING)
            outcome.add_stage(STAGE_VERIFY, OperationStatus.SUCCESS)
        else:
            detail = f"HTTP {probe.status_code}" if probe.status_code else probe.error
            self.reporter.warning(f"{MSG_SERVICE_STARTING} ({detail})")
            outcome.add_stage(STAGE_VERIFY, OperationStatus.WARNING,
                              f"Service probe returned {detail}")


def deploy(tag: Optional[str] = None,
           skip_build: bool = False,
           dry_run: bool = False,
           no_cache: bool = False,
           strategy: Optional[str] = None,
           project_root: Optional[Union[str, Path]] = None,
           config_path: Optional[Union[str, Path]] = None) -> DeploymentOutcome:
    """
    Convenience function for a full deployment run

    Args:
        tag: Image tag; defaults to ``hub-chat-<short hash>``
        skip_build: Deploy an existing image
        dry_run: Print commands instead of running them
        no_cache: Disable the build cache
        strategy: ``local`` or ``remote``
        project_root: Git checkout / build context directory
        config_path: Explicit config file

    Returns:
        DeploymentOutcome
    """
    config_service = ConfigService(project_root=project_root, config_path=config_path)
    config = config_service.build_run_config(
        tag=tag,
        skip_build=skip_build,
        dry_run=dry_run,
        no_cache=no_cache,
        strategy=strategy,
    )
    reporter = StageReporter()
    runner = CommandRunner(
        dry_run=config.dry_run,
        echo=reporter.command,
        cwd=config_service.project_root
    )
    return Deployer(config, runner=runner, reporter=reporter).run()
