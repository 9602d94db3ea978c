# hub_deploy/builders/base.py
"""Image builder abstract base class"""

from abc import ABC, abstractmethod
from typing import List

from ..models.config import RunConfig
from ..utils.shell_utils import CommandRunner


class ImageBuilder(ABC):
    """Abstract base class for all image build strategies"""

    #: True when the builder also rolls the image out to Cloud Run
    performs_deploy: bool = False

    def __init__(self, runner: CommandRunner):
        """
        Initialize builder

        Args:
            runner: Command runner (carries the dry-run switch)
        """
        self.runner = runner

    @abstractmethod
    def build_command(self, config: RunConfig) -> List[str]:
        """
        Compose the build command line

        Args:
            config: Run configuration

        Returns:
            Command and arguments
        """
        pass

    def build(self, config: RunConfig) -> None:
        """
        Build and push the image (echo only in dry-run mode)

        Raises:
            ExternalCommandError: If the build command fails
        """
        self.runner.run(self.build_command(config))
