from abc import ABC, abstractmethod
from chunkscribe.core.shared_types import MediaFile
from .models import StreamInfo

class IDurationProber(ABC):
    """
    Contract for reading media metadata without decoding samples.
    """
    @abstractmethod
    def probe_duration_ms(self, media: MediaFile) -> float:
        """
        Returns the playback duration in milliseconds.

        Raises:
            DecodeError: if the media cannot be probed.
        """
        pass

    @abstractmethod
    def probe_stream_info(self, media: MediaFile) -> StreamInfo:
        """
        Returns sample rate and channel count of the first audio stream.

        Raises:
            DecodeError: if there is no audio stream.
        """
        pass
