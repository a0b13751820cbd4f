# File: chunkscribe/core/errors.py

from typing import Optional
from chunkscribe.core.common.enums import FailureReason


class ChunkscribeError(Exception):
    """
    Root of every failure the pipeline knows how to report.
    Each subclass carries the FailureReason stored on the failed job.
    """
    reason: FailureReason = FailureReason.SERVICE_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class DecodeError(ChunkscribeError):
    """The file could not be probed or decoded. Not retryable."""
    reason = FailureReason.DECODE_ERROR


class TranscriptionTimeout(ChunkscribeError):
    reason = FailureReason.TIMEOUT


class InvalidCredential(ChunkscribeError):
    reason = FailureReason.INVALID_CREDENTIAL


class PayloadTooLarge(ChunkscribeError):
    reason = FailureReason.PAYLOAD_TOO_LARGE


class BadInput(ChunkscribeError):
    """HTTP 400. `message` is whatever the service said was wrong."""
    reason = FailureReason.BAD_INPUT


class ServiceError(ChunkscribeError):
    reason = FailureReason.SERVICE_ERROR

    def __init__(self, message: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"[{self.status}] {self.message}"
        return self.message


class FileRejected(Exception):
    """Raised at intake when a file can never be processed (e.g. over the upload ceiling)."""


class InvalidTransition(Exception):
    """Raised when a job is asked to move to a status its state machine forbids."""


def user_message(error: ChunkscribeError, file_name: str) -> str:
    """
    Human-readable text for a failed file.
    Every FailureReason gets its own wording.
    """
    if error.reason == FailureReason.DECODE_ERROR:
        return f"Could not read audio from {file_name}. The file may be corrupt or in an unsupported format."
    if error.reason == FailureReason.TIMEOUT:
        return f"Transcription timed out for {file_name}. Please try with a shorter file or split it into chunks."
    if error.reason == FailureReason.INVALID_CREDENTIAL:
        return "Invalid ElevenLabs API key."
    if error.reason == FailureReason.PAYLOAD_TOO_LARGE:
        return f"File {file_name} is too large for processing. Please use a smaller file or a shorter chunk duration."
    if error.reason == FailureReason.BAD_INPUT:
        return f"Error transcribing {file_name}: {error.message or 'Bad request'}"
    return f"Error transcribing {file_name}: {error.message or 'Error transcribing audio.'}"
