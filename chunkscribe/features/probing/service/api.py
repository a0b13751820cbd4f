from ..data.ffprobe_adapter import FFprobeAdapter
from chunkscribe.core.shared_types import MediaFile

def probe_duration_ms(media: MediaFile) -> float:
    """
    Standalone API: duration of a media blob in milliseconds.
    Raises DecodeError if the file cannot be probed.
    """
    return FFprobeAdapter().probe_duration_ms(media)
