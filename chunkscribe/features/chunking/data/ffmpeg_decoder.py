import subprocess
import logging
from typing import Optional
import numpy as np

from chunkscribe.core.config.settings import settings
from chunkscribe.core.errors import DecodeError
from chunkscribe.core.shared_types import MediaFile
from chunkscribe.features.probing.domain.interfaces import IDurationProber
from ..domain.interfaces import IAudioDecoder
from ..domain.models import DecodedAudio

logger = logging.getLogger(__name__)


class FFmpegAudioDecoder(IAudioDecoder):
    """
    Concrete implementation of IAudioDecoder using FFmpeg.
    Decodes to 32-bit float PCM at the stream's own rate and channel count (no resampling, no downmix).
    """

    def __init__(self, prober: Optional[IDurationProber] = None, binary: Optional[str] = None):
        if prober is None:
            from chunkscribe.features.probing.data.ffprobe_adapter import FFprobeAdapter
            prober = FFprobeAdapter()
        self.prober = prober
        self.binary = binary or settings.FFMPEG_BINARY

    def decode(self, media: MediaFile) -> DecodedAudio:
        stream = self.prober.probe_stream_info(media)

        with media.playable_path() as path:
            # -vn: Disable video
            # -map 0:a:0: First audio stream only
            # -f f32le: Raw little-endian float samples, frame-interleaved, to stdout
            cmd = [
                self.binary,
                "-v", "error",
                "-i", str(path),
                "-vn",
                "-map", "0:a:0",
                "-f", "f32le",
                "-acodec", "pcm_f32le",
                "-ac", str(stream.channels),
                "-ar", str(stream.sample_rate),
                "pipe:1",
            ]

            logger.info(f"Decoding audio: {media.name} ({stream.sample_rate} Hz, {stream.channels} ch)")

            try:
                result = subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
            except FileNotFoundError as e:
                raise DecodeError(f"ffmpeg binary not found: {self.binary}") from e
            except subprocess.CalledProcessError as e:
                error_msg = e.stderr.decode(errors="replace").strip() if e.stderr else str(e)
                logger.error(f"FFmpeg decode failed for {media.name}: {error_msg}")
                raise DecodeError(f"Audio decoding failed: {error_msg}") from e

        raw = result.stdout
        frame_bytes = 4 * stream.channels
        usable = len(raw) - (len(raw) % frame_bytes)
        if usable != len(raw):
            logger.warning(f"Dropping {len(raw) - usable} trailing bytes of a partial frame in {media.name}")

        # (frames, channels) -> (channels, frames); copy so each channel is contiguous
        interleaved = np.frombuffer(raw[:usable], dtype="<f4").reshape(-1, stream.channels)
        samples = np.ascontiguousarray(interleaved.T, dtype=np.float32)

        return DecodedAudio(sample_rate=stream.sample_rate, samples=samples)
