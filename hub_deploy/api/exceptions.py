"""Exception definitions for hub-deploy"""

from typing import Optional, Sequence

from ..constants import ErrorCode


class HubDeployError(Exception):
    """Base exception for hub-deploy

    Every subclass is fatal for a run: the CLI prints it and exits 1.
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(HubDeployError):
    """Bad or missing input, e.g. unobtainable commit hash or broken config file"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class PrerequisiteError(HubDeployError):
    """Required tool is missing or the operator is not authenticated"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PREREQUISITE_FAILED)


class MissingArtifactError(HubDeployError):
    """Image requested with --skip-build is not in the registry"""

    def __init__(self, image: str):
        message = f"Image {image} does not exist in registry"
        super().__init__(message, ErrorCode.ARTIFACT_MISSING)
        self.image = image


class ExternalCommandError(HubDeployError):
    """External command returned a non-zero exit status"""

    def __init__(self,
                 command: Sequence[str],
                 returncode: int,
                 details: Optional[str] = None):
        message = f"Command failed with exit code {returncode}: {' '.join(command)}"
        if details:
            message = f"{message}\n{details}"
        super().__init__(message, ErrorCode.EXTERNAL_COMMAND_FAILED)
        self.command = list(command)
        self.returncode = returncode
        self.details = details
