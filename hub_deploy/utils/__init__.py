"""Utility functions for hub-deploy"""

from .git_utils import get_short_commit
from .shell_utils import CommandRunner, format_command
from .output import StageReporter, console

__all__ = [
    "CommandRunner",
    "format_command",
    "get_short_commit",
    "StageReporter",
    "console",
]
