import logging
import math
from typing import List, Optional

from chunkscribe.core.shared_types import MediaFile
from ..domain.interfaces import IAudioDecoder, IChunkPartitioner, IContainerEncoder
from ..domain.models import AudioSegment, DecodedAudio

logger = logging.getLogger(__name__)


def _sample_at(time_ms: float, sample_rate: int) -> int:
    # floor, never round: neighbours share the exact same boundary sample
    return math.floor((time_ms / 1000) * sample_rate)


def partition_audio(audio: DecodedAudio, chunk_duration_ms: float, encoder: IContainerEncoder) -> List[AudioSegment]:
    """
    Cuts decoded audio into consecutive segments of chunk_duration_ms.

    Step i covers [i * d, min((i + 1) * d, T)) where T is the total duration, so
    the last step is clamped to T and the count is ceil(T / d). Sample bounds are
    floored, the final segment ends on the last frame, and samples are copied
    verbatim (no resampling, channel order kept).
    """
    if chunk_duration_ms <= 0:
        raise ValueError(f"Chunk duration must be positive, got {chunk_duration_ms}")

    total_ms = audio.duration_ms
    total_frames = audio.frame_count
    segments: List[AudioSegment] = []

    index = 0
    start_ms = 0.0
    while start_ms < total_ms:
        # Same expression as the next step's start, so neighbours share the boundary exactly
        end_ms = min((index + 1) * chunk_duration_ms, total_ms)
        start_sample = _sample_at(start_ms, audio.sample_rate)
        end_sample = total_frames if end_ms >= total_ms else _sample_at(end_ms, audio.sample_rate)

        chunk = audio.samples[:, start_sample:end_sample].copy()
        segments.append(AudioSegment(
            payload=encoder.encode(chunk, audio.sample_rate),
            start_ms=start_ms,
            end_ms=end_ms,
            sequence_index=index,
        ))

        index += 1
        # Multiply rather than accumulate so float drift never adds a sliver segment
        start_ms = float(index * chunk_duration_ms)

    return segments


class ChunkPartitioner(IChunkPartitioner):
    """
    Decode once, then slice. Each slice is re-encoded as a standalone WAV.
    """

    def __init__(self, decoder: Optional[IAudioDecoder] = None, encoder: Optional[IContainerEncoder] = None):
        if decoder is None:
            from ..data.ffmpeg_decoder import FFmpegAudioDecoder
            decoder = FFmpegAudioDecoder()
        if encoder is None:
            from ..data.wav_encoder import WavEncoder
            encoder = WavEncoder()
        self.decoder = decoder
        self.encoder = encoder

    def partition(self, media: MediaFile, chunk_duration_ms: float) -> List[AudioSegment]:
        audio = self.decoder.decode(media)
        logger.info(
            f"Partitioning {media.name}: {audio.duration_ms / 1000:.1f}s, "
            f"{audio.sample_rate} Hz, {audio.channels} ch into {chunk_duration_ms / 1000:.0f}s chunks"
        )

        segments = partition_audio(audio, chunk_duration_ms, self.encoder)

        if not segments:
            logger.warning(f"{media.name} decoded to zero samples; nothing to split.")
        else:
            logger.info(f"Created {len(segments)} segments for {media.name}")
        return segments
