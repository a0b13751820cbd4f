# File: chunkscribe/features/transcription/data/elevenlabs_adapter.py
import logging
from typing import Optional
import requests

from chunkscribe.core.config.settings import settings
from chunkscribe.core.errors import (
    BadInput,
    InvalidCredential,
    PayloadTooLarge,
    ServiceError,
    TranscriptionTimeout,
)
from ..domain.interfaces import ITranscriber

logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response) -> str:
    """
    Pulls a readable message out of an error response.
    Prefers `error`, then `detail` (a string, or an object with `message`), then the raw body.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()

    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])
        detail = body.get("detail")
        if isinstance(detail, dict):
            return str(detail.get("message") or detail)
        if detail:
            return str(detail)
    return response.text.strip()


class ElevenLabsTranscriber(ITranscriber):
    """
    Concrete implementation of ITranscriber using the ElevenLabs speech-to-text endpoint.
    Translates HTTP failures into the pipeline's typed errors; retry policy lives elsewhere.
    """

    def __init__(self, api_url: Optional[str] = None, model_id: Optional[str] = None, timeout: Optional[float] = None):
        self.api_url = api_url or settings.ELEVENLABS_API_URL
        self.model_id = model_id or settings.ELEVENLABS_MODEL_ID
        self.timeout = timeout if timeout is not None else settings.TRANSCRIPTION_TIMEOUT_SECONDS

    def transcribe(self, payload: bytes, filename: str, mime_type: str, credential: str) -> str:
        logger.info(f"Submitting {filename} ({len(payload)} bytes) to {self.model_id}...")

        try:
            response = requests.post(
                self.api_url,
                headers={"xi-api-key": credential},
                data={"model_id": self.model_id},
                files={"file": (filename, payload, mime_type)},
                timeout=self.timeout,
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.error(f"Transcription request for {filename} timed out or could not connect: {e}")
            raise TranscriptionTimeout(str(e)) from e
        except requests.RequestException as e:
            logger.error(f"Transcription request for {filename} failed: {e}")
            raise ServiceError(str(e)) from e

        if 200 <= response.status_code < 300:
            return self._extract_text(response)

        detail = _error_detail(response)
        logger.error(f"Transcription service returned {response.status_code} for {filename}: {detail}")

        if response.status_code == 401:
            raise InvalidCredential(detail or "Invalid ElevenLabs API key.")
        if response.status_code == 408:
            raise TranscriptionTimeout(detail or "Request timed out.")
        if response.status_code == 413:
            raise PayloadTooLarge(detail or "Payload too large.")
        if response.status_code == 400:
            raise BadInput(detail or "Bad request")
        raise ServiceError(detail or "Error transcribing audio.", status=response.status_code)

    @staticmethod
    def _extract_text(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text

        if isinstance(body, dict) and body.get("text") is not None:
            return str(body["text"])

        # No `text` field: the whole body is the transcript
        return response.text
