"""Operation result models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..constants import HEALTHY_STATUS_CODES
from .config import ImageReference


class OperationStatus(Enum):
    """Stage status"""
    SUCCESS = "success"
    SKIPPED = "skipped"
    WARNING = "warning"
    FAILED = "failed"


@dataclass
class StageResult:
    """Result of one pipeline stage"""

    name: str
    status: OperationStatus
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.status != OperationStatus.FAILED


@dataclass
class ProbeResult:
    """Result of the HTTP liveness probe"""

    url: str
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def healthy(self) -> bool:
        """200 and 302 count as responding"""
        return self.status_code in HEALTHY_STATUS_CODES


@dataclass
class DeploymentOutcome:
    """Everything a run produced, for the final summary"""

    image: ImageReference
    dry_run: bool = False
    custom_url: Optional[str] = None
    service_url: Optional[str] = None
    probe: Optional[ProbeResult] = None
    stages: List[StageResult] = field(default_factory=list)

    def add_stage(self, name: str, status: OperationStatus, message: str = "") -> StageResult:
        """Record a stage result"""
        stage = StageResult(name=name, status=status, message=message)
        self.stages.append(stage)
        return stage

    def stage(self, name: str) -> Optional[StageResult]:
        """Look up a recorded stage by name"""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    @property
    def warnings(self) -> List[str]:
        return [s.message for s in self.stages if s.status == OperationStatus.WARNING]

    @property
    def success(self) -> bool:
        return all(s.is_success for s in self.stages)
