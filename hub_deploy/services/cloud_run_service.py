"""Cloud Run and Artifact Registry operations via the gcloud CLI"""

import logging
from typing import List

from ..api.exceptions import ExternalCommandError, PrerequisiteError
from ..models.config import RunConfig
from ..utils.shell_utils import CommandRunner
from ..constants import DOCKER_BIN, GCLOUD_BIN, DOCKER_CREDENTIAL_HELPER

logger = logging.getLogger(__name__)


class CloudRunService:
    """Thin wrapper around the gcloud commands the deployment needs"""

    def __init__(self, runner: CommandRunner):
        """Initialize service

        Args:
            runner: Command runner (carries the dry-run switch)
        """
        self.runner = runner

    # Prerequisites

    def check_tools(self) -> None:
        """Verify docker and gcloud are installed

        Raises:
            PrerequisiteError: If either binary is missing from PATH
        """
        if not self.runner.which(DOCKER_BIN):
            raise PrerequisiteError("docker is not installed")
        if not self.runner.which(GCLOUD_BIN):
            raise PrerequisiteError("gcloud CLI is not installed")

    def check_auth(self) -> None:
        """Verify the operator has an active gcloud login

        Raises:
            PrerequisiteError: If no identity token can be printed
        """
        if not self.runner.probe([GCLOUD_BIN, "auth", "print-identity-token"]):
            raise PrerequisiteError("Not authenticated with gcloud. Run 'gcloud auth login'")

    def docker_auth_configured(self, registry_host: str) -> bool:
        """True when docker already uses gcloud credentials for the registry host"""
        try:
            output = self.runner.capture([DOCKER_CREDENTIAL_HELPER, "list"])
        except ExternalCommandError:
            return False
        return registry_host in output

    @staticmethod
    def configure_docker_command(registry_host: str) -> List[str]:
        return [GCLOUD_BIN, "auth", "configure-docker", registry_host, "--quiet"]

    def configure_docker(self, registry_host: str) -> None:
        """Register gcloud as docker credential helper (echo only in dry-run)"""
        logger.info("Configuring docker credentials for %s", registry_host)
        self.runner.run(self.configure_docker_command(registry_host))

    # Registry

    def image_exists(self, config: RunConfig) -> bool:
        """Check whether the image tag is present in Artifact Registry"""
        return self.runner.probe([
            GCLOUD_BIN, "artifacts", "docker", "images", "describe",
            str(config.image),
            f"--project={config.project_id}",
        ])

    # Service

    @staticmethod
    def deploy_command(config: RunConfig) -> List[str]:
        return [
            GCLOUD_BIN, "run", "deploy", config.service_name,
            f"--image={config.image}",
            f"--region={config.region}",
            f"--project={config.project_id}",
        ]

    def deploy(self, config: RunConfig) -> None:
        """Roll the image out to Cloud Run

        Raises:
            ExternalCommandError: If gcloud reports a failure
        """
        self.runner.run(self.deploy_command(config))

    @staticmethod
    def describe_url_command(config: RunConfig) -> List[str]:
        return [
            GCLOUD_BIN, "run", "services", "describe", config.service_name,
            f"--region={config.region}",
            f"--project={config.project_id}",
            "--format=value(status.url)",
        ]

    def get_service_url(self, config: RunConfig) -> str:
        """Public URL of the deployed service

        Raises:
            ExternalCommandError: If the service cannot be described
        """
        return self.runner.capture(self.describe_url_command(config))
