"""Image build strategies"""

from .base import ImageBuilder
from .local import BuildxBuilder
from .cloud_build import CloudBuildBuilder
from .factory import BuilderFactory

__all__ = [
    "ImageBuilder",
    "BuildxBuilder",
    "CloudBuildBuilder",
    "BuilderFactory",
]
