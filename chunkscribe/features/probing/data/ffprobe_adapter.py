import json
import logging
import subprocess
from pathlib import Path
from typing import Optional

from chunkscribe.core.config.settings import settings
from chunkscribe.core.errors import DecodeError
from chunkscribe.core.shared_types import MediaFile
from ..domain.interfaces import IDurationProber
from ..domain.models import StreamInfo

logger = logging.getLogger(__name__)


def _as_float(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        # ffprobe reports "N/A" for unknown values
        return None


class FFprobeAdapter(IDurationProber):
    """
    Concrete implementation of IDurationProber using ffprobe.
    Reads container/stream headers only; sample data is never decoded.
    """

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or settings.FFPROBE_BINARY

    def probe_duration_ms(self, media: MediaFile) -> float:
        with media.playable_path() as path:
            info = self._run(path, media.name)

        duration = _as_float(info.get("format", {}).get("duration"))
        if duration is None:
            # Some containers (raw streams, fragmented files) only carry a stream duration
            audio = self._first_audio_stream(info)
            duration = _as_float(audio.get("duration")) if audio else None

        if duration is None or duration < 0:
            raise DecodeError(f"Could not determine duration of {media.name}")

        duration_ms = duration * 1000
        logger.debug(f"Probed {media.name}: {duration_ms:.0f} ms")
        return duration_ms

    def probe_stream_info(self, media: MediaFile) -> StreamInfo:
        with media.playable_path() as path:
            info = self._run(path, media.name)

        audio = self._first_audio_stream(info)
        if not audio:
            raise DecodeError(f"No audio stream found in {media.name}")

        sample_rate = audio.get("sample_rate")
        channels = audio.get("channels")
        try:
            return StreamInfo(sample_rate=int(sample_rate), channels=int(channels))
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Unreadable audio stream layout in {media.name}") from e

    def _run(self, path: Path, name: str) -> dict:
        # -v error: keep stderr quiet unless something is wrong
        # -of json: machine-readable output for both format and streams
        cmd = [
            self.binary,
            "-v", "error",
            "-show_entries", "format=duration:stream=codec_type,duration,sample_rate,channels",
            "-of", "json",
            str(path),
        ]

        try:
            result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise DecodeError(f"ffprobe binary not found: {self.binary}") from e
        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.strip() if e.stderr else str(e)
            logger.error(f"ffprobe failed for {name}: {error_msg}")
            raise DecodeError(f"Could not probe {name}: {error_msg}") from e

        try:
            return json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise DecodeError(f"Unparsable ffprobe output for {name}") from e

    @staticmethod
    def _first_audio_stream(info: dict) -> Optional[dict]:
        for stream in info.get("streams", []):
            if stream.get("codec_type") == "audio":
                return stream
        return None
