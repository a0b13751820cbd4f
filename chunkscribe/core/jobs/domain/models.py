from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID
from chunkscribe.core.common.enums import JobStatus, FailureReason

@dataclass(frozen=True)
class FileJob:
    """
    Read-only snapshot of one file's progress through the pipeline.
    The JobManager is the only writer; callers always get a fresh copy.
    """
    id: UUID
    file_name: str
    mime_type: str
    size_bytes: int
    status: JobStatus = JobStatus.PENDING
    segment_count: Optional[int] = None
    current_segment: Optional[int] = None
    duration_ms: Optional[float] = None
    transcript: Optional[str] = None
    failure_reason: Optional[FailureReason] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def is_split(self) -> bool:
        return bool(self.segment_count)
