from typing import List
from chunkscribe.core.config.settings import settings
from chunkscribe.core.shared_types import MediaFile
from ..domain.models import AudioSegment
from .partitioner import ChunkPartitioner

def split_audio_file(media: MediaFile, chunk_duration_ms: float = settings.CHUNK_DURATION_SECONDS * 1000) -> List[AudioSegment]:
    """
    Standalone API: decodes a media blob and returns its WAV segments.
    Useful for testing or CLI tools without the full pipeline.
    """
    return ChunkPartitioner().partition(media, chunk_duration_ms)
