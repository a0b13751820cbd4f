from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from chunkscribe.core.shared_types import MediaFile
from .models import FileJob

class IJobRepository(ABC):
    """
    Contract for the working set of file jobs.
    Knows nothing about the state machine; the JobManager enforces that.
    """

    @abstractmethod
    def add(self, media: MediaFile) -> UUID:
        """Stores the blob and a PENDING job for it. Returns the job ID."""
        pass

    @abstractmethod
    def get(self, job_id: UUID) -> Optional[FileJob]:
        pass

    @abstractmethod
    def list_all(self) -> List[FileJob]:
        """All jobs in insertion order."""
        pass

    @abstractmethod
    def load_media(self, job_id: UUID) -> Optional[MediaFile]:
        pass

    @abstractmethod
    def update(self, job_id: UUID, **fields) -> FileJob:
        """Writes the given columns and returns the new snapshot."""
        pass

    @abstractmethod
    def delete(self, job_id: UUID) -> bool:
        """Removes the job and releases its blob. Returns False if it did not exist."""
        pass
