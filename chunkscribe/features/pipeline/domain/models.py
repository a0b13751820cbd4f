# File: chunkscribe/features/pipeline/domain/models.py
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from chunkscribe.core.common.enums import JobStatus, FailureReason
from chunkscribe.core.config.settings import settings
from chunkscribe.core.jobs.domain.models import FileJob

@dataclass(frozen=True)
class PipelineConfig:
    """
    Split policy for one run.
    Defaults come from settings; thresholds are deployment configuration, not algorithm constants.
    """
    split_threshold_ms: float = settings.SPLIT_THRESHOLD_SECONDS * 1000
    chunk_duration_ms: float = settings.CHUNK_DURATION_SECONDS * 1000
    size_fallback_threshold_bytes: int = int(settings.SIZE_FALLBACK_THRESHOLD_MB * 1024 * 1024)
    # A bad key will not get better on the next file; optionally stop early
    abort_on_invalid_credential: bool = False

    def __post_init__(self):
        if self.chunk_duration_ms <= 0:
            raise ValueError(f"Chunk duration must be positive, got {self.chunk_duration_ms}")
        if self.split_threshold_ms < 0:
            raise ValueError(f"Split threshold cannot be negative, got {self.split_threshold_ms}")

@dataclass(frozen=True)
class FileOutcome:
    """
    What happened to one file in a run. `message` is user-facing and set only on failure.
    """
    job_id: UUID
    file_name: str
    status: JobStatus
    segment_count: Optional[int] = None
    failure_reason: Optional[FailureReason] = None
    message: Optional[str] = None

    @classmethod
    def from_job(cls, job: FileJob) -> "FileOutcome":
        return cls(
            job_id=job.id,
            file_name=job.file_name,
            status=job.status,
            segment_count=job.segment_count,
            failure_reason=job.failure_reason,
            message=job.error_message,
        )

@dataclass
class RunSummary:
    """
    Report returned after a run completes.
    """
    outcomes: List[FileOutcome] = field(default_factory=list)
    skipped: List[UUID] = field(default_factory=list)
    aborted: bool = False

    @property
    def completed(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == JobStatus.COMPLETED]

    @property
    def failed(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == JobStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed and not self.aborted
