from abc import ABC, abstractmethod

class ITranscriber(ABC):
    """
    Contract for any speech-to-text back end.
    Allows us to swap ElevenLabs for another hosted API later.
    """
    @abstractmethod
    def transcribe(self, payload: bytes, filename: str, mime_type: str, credential: str) -> str:
        """
        Sends one audio payload and returns the raw transcript text.
        Exactly one request per call; no retries.

        Raises:
            TranscriptionTimeout, InvalidCredential, PayloadTooLarge, BadInput, ServiceError
        """
        pass
