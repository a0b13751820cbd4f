from typing import Optional
from chunkscribe.core.shared_types import MediaFile
from chunkscribe.features.chunking.domain.models import AudioSegment
from ..data.elevenlabs_adapter import ElevenLabsTranscriber
from ..domain.interfaces import ITranscriber
from ..domain.models import TranscriptFragment

def transcribe_segment(segment: AudioSegment, credential: str, transcriber: Optional[ITranscriber] = None) -> TranscriptFragment:
    """Submits one WAV segment and tags the text with the segment's position."""
    transcriber = transcriber or ElevenLabsTranscriber()
    text = transcriber.transcribe(segment.payload, segment.filename, segment.mime_type, credential)
    return TranscriptFragment(
        text=text,
        start_ms=segment.start_ms,
        end_ms=segment.end_ms,
        sequence_index=segment.sequence_index,
    )

def transcribe_media(media: MediaFile, credential: str, duration_ms: Optional[float] = None,
                     transcriber: Optional[ITranscriber] = None) -> TranscriptFragment:
    """
    Submits a whole file as-is, treated as the single implicit segment 0.
    duration_ms is informational; it is 0 when the duration could not be probed.
    """
    transcriber = transcriber or ElevenLabsTranscriber()
    text = transcriber.transcribe(media.data, media.name, media.mime_type, credential)
    return TranscriptFragment(text=text, start_ms=0.0, end_ms=duration_ms or 0.0, sequence_index=0)
