# File: chunkscribe/features/chunking/domain/models.py
from dataclasses import dataclass, field
import numpy as np

from chunkscribe.core.shared_types import TimeRange

WAV_MIME_TYPE = "audio/wav"

@dataclass(frozen=True)
class DecodedAudio:
    """
    Fully decoded PCM held in memory.
    `samples` is float32 with shape (channels, frames); every channel has the same length.
    """
    sample_rate: int
    samples: np.ndarray = field(repr=False)

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")
        if self.samples.ndim != 2:
            raise ValueError(f"Expected a (channels, frames) array, got shape {self.samples.shape}")

    @property
    def channels(self) -> int:
        return self.samples.shape[0]

    @property
    def frame_count(self) -> int:
        return self.samples.shape[1]

    @property
    def duration_ms(self) -> float:
        return (self.frame_count / self.sample_rate) * 1000

@dataclass(frozen=True)
class AudioSegment:
    """
    One playable slice of a file, ready for submission.
    Segments of a file are contiguous: segment[i].end_ms == segment[i+1].start_ms.
    """
    payload: bytes = field(repr=False)
    start_ms: float
    end_ms: float
    sequence_index: int

    def __post_init__(self):
        if self.sequence_index < 0:
            raise ValueError(f"Sequence index cannot be negative: {self.sequence_index}")
        # Validates 0 <= start < end
        TimeRange(self.start_ms, self.end_ms)

    @property
    def filename(self) -> str:
        return f"chunk_{self.sequence_index}.wav"

    @property
    def mime_type(self) -> str:
        return WAV_MIME_TYPE

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms
