"""Image builder factory"""

from typing import Dict, Type

from .base import ImageBuilder
from .local import BuildxBuilder
from .cloud_build import CloudBuildBuilder
from ..models.config import BuildStrategy
from ..utils.shell_utils import CommandRunner


class BuilderFactory:
    """Factory for creating image builder instances"""

    # Registry of build strategies
    _builders: Dict[BuildStrategy, Type[ImageBuilder]] = {
        BuildStrategy.LOCAL: BuildxBuilder,
        BuildStrategy.REMOTE: CloudBuildBuilder,
    }

    @classmethod
    def create(cls, strategy: BuildStrategy, runner: CommandRunner) -> ImageBuilder:
        """Create the builder for a strategy

        Args:
            strategy: Build strategy
            runner: Command runner handed to the builder

        Returns:
            Image builder instance

        Raises:
            ValueError: If the strategy has no registered builder
        """
        if strategy not in cls._builders:
            raise ValueError(f"Unsupported build strategy: {strategy.value}")
        return cls._builders[strategy](runner)
