import logging
from datetime import datetime, timezone
from threading import RLock
from typing import List, Optional
from uuid import UUID

from chunkscribe.core.common.enums import JobStatus, FailureReason
from chunkscribe.core.errors import InvalidTransition
from chunkscribe.core.shared_types import MediaFile
from ..domain.interfaces import IJobRepository
from ..domain.models import FileJob

logger = logging.getLogger(__name__)

# status -> statuses it may move to
_ALLOWED = {
    JobStatus.PENDING: {JobStatus.TRANSCRIBING},
    JobStatus.TRANSCRIBING: {JobStatus.TRANSCRIBING, JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.FAILED: {JobStatus.TRANSCRIBING},
    JobStatus.COMPLETED: set(),
}


class JobManager:
    """
    Public API for the Jobs Core Module.
    Owns the working set of files and is the single path through which a job's state changes.
    Every repository call, reads included, runs under one lock, so worker threads may
    share a manager.
    """

    def __init__(self, repo: Optional[IJobRepository] = None):
        if repo is None:
            from ..data.repository import SqlJobRepo
            repo = SqlJobRepo()
        self.repo = repo
        # Reentrant: transition() reads through get() while holding it
        self._lock = RLock()

    # --- Working set ---

    def add_file(self, media: MediaFile) -> UUID:
        """Accepts a file into the working set as a PENDING job."""
        with self._lock:
            job_id = self.repo.add(media)
        logger.info(f"Job Created: {job_id} [{media.name}, {media.size_bytes} bytes]")
        return job_id

    def get(self, job_id: UUID) -> FileJob:
        with self._lock:
            job = self.repo.get(job_id)
        if job is None:
            raise KeyError(f"Job {job_id} not found.")
        return job

    def list_jobs(self) -> List[FileJob]:
        with self._lock:
            return self.repo.list_all()

    def media_for(self, job_id: UUID) -> MediaFile:
        with self._lock:
            media = self.repo.load_media(job_id)
        if media is None:
            raise KeyError(f"Job {job_id} not found.")
        return media

    def remove(self, job_id: UUID) -> bool:
        """Drops a job and its blob. Only explicit user action should call this."""
        with self._lock:
            removed = self.repo.delete(job_id)
        if removed:
            logger.info(f"Job Removed: {job_id}")
        return removed

    # --- State machine ---

    def transition(self, job_id: UUID, status: JobStatus, **fields) -> FileJob:
        """
        Moves a job to `status`, writing any extra columns alongside.

        Rules:
            - Only edges listed in _ALLOWED are accepted.
            - COMPLETED requires a transcript; every other status clears it.
            - Re-entering TRANSCRIBING from a terminal state wipes progress and failure info.
        """
        with self._lock:
            current = self.get(job_id)
            if status not in _ALLOWED[current.status]:
                raise InvalidTransition(f"Job {job_id}: {current.status.value} -> {status.value} is not allowed.")

            now = datetime.now(timezone.utc)
            updates = dict(fields)
            updates["status"] = status

            if status == JobStatus.COMPLETED:
                if updates.get("transcript") is None:
                    raise InvalidTransition(f"Job {job_id}: cannot complete without a transcript.")
                updates["failure_reason"] = None
                updates["error_message"] = None
                updates["finished_at"] = now
            else:
                updates["transcript"] = None

            if status == JobStatus.TRANSCRIBING and current.status != JobStatus.TRANSCRIBING:
                updates.setdefault("segment_count", None)
                updates.setdefault("current_segment", None)
                updates.setdefault("duration_ms", None)
                updates["failure_reason"] = None
                updates["error_message"] = None
                updates["started_at"] = now
                updates["finished_at"] = None

            if status == JobStatus.FAILED:
                updates["finished_at"] = now

            return self.repo.update(job_id, **updates)

    def start(self, job_id: UUID) -> FileJob:
        return self.transition(job_id, JobStatus.TRANSCRIBING)

    def update_progress(self, job_id: UUID, **fields) -> FileJob:
        return self.transition(job_id, JobStatus.TRANSCRIBING, **fields)

    def complete(self, job_id: UUID, transcript: str) -> FileJob:
        return self.transition(job_id, JobStatus.COMPLETED, transcript=transcript)

    def fail(self, job_id: UUID, reason: FailureReason, message: str) -> FileJob:
        return self.transition(job_id, JobStatus.FAILED, failure_reason=reason, error_message=message)
