from abc import ABC, abstractmethod
from typing import List
import numpy as np

from chunkscribe.core.shared_types import MediaFile
from .models import AudioSegment, DecodedAudio

class IAudioDecoder(ABC):
    """
    Contract for turning any audio/video blob into raw PCM.
    """
    @abstractmethod
    def decode(self, media: MediaFile) -> DecodedAudio:
        """
        Decodes every sample of the first audio stream.
        Sample rate and channel layout are preserved.

        Raises:
            DecodeError: if the audio cannot be decoded.
        """
        pass

class IContainerEncoder(ABC):
    """
    Contract for wrapping raw PCM in a self-contained, playable container.
    """
    @abstractmethod
    def encode(self, samples: np.ndarray, sample_rate: int) -> bytes:
        pass

class IChunkPartitioner(ABC):
    @abstractmethod
    def partition(self, media: MediaFile, chunk_duration_ms: float) -> List[AudioSegment]:
        """
        Splits the file into contiguous segments of at most chunk_duration_ms.
        Returns an empty list for a file with no samples.

        Raises:
            DecodeError: if the audio cannot be decoded.
        """
        pass
