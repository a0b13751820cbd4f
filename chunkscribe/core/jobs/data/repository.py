from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from chunkscribe.core.database.connection import build_session_factory, init_db
from chunkscribe.core.shared_types import MediaFile
from ..domain.interfaces import IJobRepository
from ..domain.models import FileJob
from .sql_models import FileJobModel, MediaFileModel

# Columns the manager is allowed to write through update()
_MUTABLE_COLUMNS = {
    "status",
    "segment_count",
    "current_segment",
    "duration_ms",
    "transcript",
    "failure_reason",
    "error_message",
    "started_at",
    "finished_at",
}


def _to_domain(job: FileJobModel) -> FileJob:
    return FileJob(
        id=job.id,
        file_name=job.media.name,
        mime_type=job.media.mime_type,
        size_bytes=job.media.size_bytes,
        status=job.status,
        segment_count=job.segment_count,
        current_segment=job.current_segment,
        duration_ms=job.duration_ms,
        transcript=job.transcript,
        failure_reason=job.failure_reason,
        error_message=job.error_message,
        created_at=job.created_at,
        started_at=job.started_at,
        finished_at=job.finished_at,
    )


class SqlJobRepo(IJobRepository):

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        if session_factory is None:
            # A private database per repository: one working set, never shared
            session_factory = build_session_factory()
        else:
            init_db(session_factory.kw["bind"])
        self.session_factory = session_factory

    def add(self, media: MediaFile) -> UUID:
        with self.session_factory() as db:
            try:
                next_position = (db.query(func.max(FileJobModel.position)).scalar() or 0) + 1

                media_row = MediaFileModel(
                    name=media.name,
                    mime_type=media.mime_type,
                    size_bytes=media.size_bytes,
                    content=media.data,
                )
                db.add(media_row)
                db.flush()  # Flush to generate ID

                job = FileJobModel(media_file_id=media_row.id, position=next_position)
                db.add(job)
                db.commit()
                db.refresh(job)
                return job.id
            except Exception as e:
                db.rollback()
                raise e

    def get(self, job_id: UUID) -> Optional[FileJob]:
        with self.session_factory() as db:
            job = db.get(FileJobModel, job_id)
            return _to_domain(job) if job else None

    def list_all(self) -> List[FileJob]:
        with self.session_factory() as db:
            rows = db.query(FileJobModel).order_by(FileJobModel.position).all()
            return [_to_domain(r) for r in rows]

    def load_media(self, job_id: UUID) -> Optional[MediaFile]:
        with self.session_factory() as db:
            job = db.get(FileJobModel, job_id)
            if not job:
                return None
            return MediaFile(name=job.media.name, mime_type=job.media.mime_type, data=job.media.content)

    def update(self, job_id: UUID, **fields) -> FileJob:
        unknown = set(fields) - _MUTABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update job columns: {sorted(unknown)}")

        with self.session_factory() as db:
            job = db.get(FileJobModel, job_id)
            if not job:
                raise KeyError(f"Job {job_id} not found.")
            for key, value in fields.items():
                setattr(job, key, value)
            db.commit()
            db.refresh(job)
            return _to_domain(job)

    def delete(self, job_id: UUID) -> bool:
        with self.session_factory() as db:
            job = db.get(FileJobModel, job_id)
            if not job:
                return False
            media_row = job.media
            db.delete(job)
            db.flush()
            db.delete(media_row)
            db.commit()
            return True
