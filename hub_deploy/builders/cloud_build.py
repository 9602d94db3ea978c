"""Cloud Build remote builder"""

from typing import List

from .base import ImageBuilder
from ..constants import GCLOUD_BIN
from ..models.config import RunConfig


class CloudBuildBuilder(ImageBuilder):
    """Submits the build context to Cloud Build

    The Cloud Build config builds, pushes and deploys the image, so the
    orchestrator skips its own deploy stage afterwards.
    """

    performs_deploy = True

    def build_command(self, config: RunConfig) -> List[str]:
        substitutions = {
            "_IMAGE": str(config.image),
            "_BUILD_HASH": config.build_hash,
            "_SERVICE": config.service_name,
            "_REGION": config.region,
            "_NO_CACHE": "true" if config.no_cache else "false",
        }
        return [
            GCLOUD_BIN, "builds", "submit", config.settings.build_context,
            f"--config={config.settings.cloudbuild_config}",
            f"--project={config.project_id}",
            "--substitutions=" + ",".join(f"{k}={v}" for k, v in substitutions.items()),
        ]
