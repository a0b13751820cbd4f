# File: chunkscribe/features/transcription/domain/models.py
from dataclasses import dataclass

@dataclass(frozen=True)
class TranscriptFragment:
    """
    Text returned for one segment, tagged with where that segment sits in the file.
    """
    text: str
    start_ms: float
    end_ms: float
    sequence_index: int
