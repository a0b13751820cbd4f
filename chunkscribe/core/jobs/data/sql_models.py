import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Float, Text, LargeBinary, DateTime, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from chunkscribe.core.database.base import Base
from chunkscribe.core.common.enums import JobStatus, FailureReason


def utc_now():
    return datetime.now(timezone.utc)


class MediaFileModel(Base):
    """
    The uploaded blob. Lives exactly as long as the job that owns it.
    """
    __tablename__ = "media_files"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    mime_type = Column(String, nullable=False)
    size_bytes = Column(Integer, nullable=False)
    content = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    job = relationship("FileJobModel", back_populates="media", uselist=False)


class FileJobModel(Base):
    __tablename__ = "file_jobs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    media_file_id = Column(Uuid(as_uuid=True), ForeignKey("media_files.id"), nullable=False, unique=True)

    # Insertion order of the working set; runs walk jobs in this order
    position = Column(Integer, nullable=False, index=True)

    status = Column(SQLEnum(JobStatus), default=JobStatus.PENDING, nullable=False, index=True)

    # Progress pair shown by the presentation layer
    segment_count = Column(Integer, nullable=True)
    current_segment = Column(Integer, nullable=True)
    duration_ms = Column(Float, nullable=True)

    # Set iff status == COMPLETED
    transcript = Column(Text, nullable=True)

    failure_reason = Column(SQLEnum(FailureReason), nullable=True)
    error_message = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    media = relationship("MediaFileModel", back_populates="job")
