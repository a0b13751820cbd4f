import mimetypes
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from chunkscribe.core.common.enums import FileType

@dataclass(frozen=True)
class TimeRange:
    """
    Value Object representing a valid span of time in milliseconds.
    Enforces that start_ms is strictly before end_ms.
    """
    start_ms: float
    end_ms: float

    def __post_init__(self):
        if self.start_ms < 0 or self.end_ms < 0:
            raise ValueError("Timestamps cannot be negative.")
        if self.start_ms >= self.end_ms:
            raise ValueError(f"Start time ({self.start_ms}) must be before end time ({self.end_ms}).")

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms

@dataclass(frozen=True)
class MediaFile:
    """
    An uploaded audio/video blob.
    Immutable once selected; the bytes live in memory for the whole run.
    """
    name: str
    mime_type: str
    data: bytes = field(repr=False)

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("File name cannot be empty.")

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "MediaFile":
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Media file not found: {path}")
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or guessed or "application/octet-stream",
            data=path.read_bytes(),
        )

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def file_type(self) -> FileType:
        if self.mime_type.startswith("video"):
            return FileType.VIDEO
        if self.mime_type.startswith("audio"):
            return FileType.AUDIO
        return FileType.UNKNOWN

    @contextmanager
    def playable_path(self) -> Iterator[Path]:
        """
        Materializes the blob as a temporary file that ffmpeg/ffprobe can open.
        The file is removed on exit, whether or not the body raised.
        """
        suffix = Path(self.name).suffix
        fd, tmp_name = tempfile.mkstemp(prefix="chunkscribe_", suffix=suffix)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(self.data)
            yield tmp_path
        finally:
            tmp_path.unlink(missing_ok=True)
