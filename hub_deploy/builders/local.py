"""Local docker buildx builder"""

from typing import List

from .base import ImageBuilder
from ..constants import DOCKER_BIN, SLIM_BUILD_ARG
from ..models.config import RunConfig


class BuildxBuilder(ImageBuilder):
    """Builds on this machine with ``docker buildx`` and pushes as part of the build"""

    def build_command(self, config: RunConfig) -> List[str]:
        command = [
            DOCKER_BIN, "buildx", "build",
            f"--platform={config.settings.platform}",
            f"--build-arg={SLIM_BUILD_ARG}",
            f"--build-arg=BUILD_HASH={config.build_hash}",
        ]
        if config.no_cache:
            command.append("--no-cache")
        command.extend([
            "-t", str(config.image),
            "--push",
            config.settings.build_context,
        ])
        return command
