import json
import pytest
import requests

from chunkscribe.core.errors import (
    BadInput,
    InvalidCredential,
    PayloadTooLarge,
    ServiceError,
    TranscriptionTimeout,
)
from chunkscribe.core.shared_types import MediaFile
from chunkscribe.features.chunking.domain.models import AudioSegment
from chunkscribe.features.transcription.data.elevenlabs_adapter import ElevenLabsTranscriber
from chunkscribe.features.transcription.service.api import transcribe_media, transcribe_segment

API_URL = "https://stt.example.test/v1/speech-to-text"


class FakeResponse:
    def __init__(self, status_code: int, body):
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def post_calls(monkeypatch):
    """
    Replaces requests.post. Tests set `responder` to a FakeResponse or an exception.
    """
    state = {"calls": [], "responder": FakeResponse(200, {"text": "hello"})}

    def fake_post(url, **kwargs):
        state["calls"].append((url, kwargs))
        responder = state["responder"]
        if isinstance(responder, Exception):
            raise responder
        return responder

    monkeypatch.setattr(requests, "post", fake_post)
    return state


@pytest.fixture
def transcriber():
    return ElevenLabsTranscriber(api_url=API_URL, model_id="scribe_v1", timeout=300)


def test_request_shape(post_calls, transcriber):
    text = transcriber.transcribe(b"RIFF....", "chunk_0.wav", "audio/wav", "sk-test")

    assert text == "hello"
    assert len(post_calls["calls"]) == 1
    url, kwargs = post_calls["calls"][0]
    assert url == API_URL
    assert kwargs["headers"] == {"xi-api-key": "sk-test"}
    assert kwargs["data"] == {"model_id": "scribe_v1"}
    assert kwargs["files"] == {"file": ("chunk_0.wav", b"RIFF....", "audio/wav")}
    assert kwargs["timeout"] == 300


def test_missing_text_field_returns_whole_body(post_calls, transcriber):
    post_calls["responder"] = FakeResponse(200, {"language_code": "en", "words": []})

    text = transcriber.transcribe(b"x", "a.wav", "audio/wav", "k")

    assert json.loads(text) == {"language_code": "en", "words": []}


def test_plain_text_body(post_calls, transcriber):
    post_calls["responder"] = FakeResponse(200, "just words")

    assert transcriber.transcribe(b"x", "a.wav", "audio/wav", "k") == "just words"


@pytest.mark.parametrize("status,body,error_cls,message", [
    (401, {"detail": {"status": "invalid_api_key", "message": "Invalid API key"}}, InvalidCredential, "Invalid API key"),
    (408, {"error": "Request Timeout"}, TranscriptionTimeout, "Request Timeout"),
    (413, "Request Entity Too Large", PayloadTooLarge, "Request Entity Too Large"),
    (400, {"detail": "Unsupported audio format"}, BadInput, "Unsupported audio format"),
    (400, {"error": "File is empty"}, BadInput, "File is empty"),
    (500, {"error": "Internal error"}, ServiceError, "Internal error"),
    (429, {"detail": {"message": "Too many concurrent requests"}}, ServiceError, "Too many concurrent requests"),
])
def test_status_mapping(post_calls, transcriber, status, body, error_cls, message):
    post_calls["responder"] = FakeResponse(status, body)

    with pytest.raises(error_cls) as exc_info:
        transcriber.transcribe(b"x", "a.wav", "audio/wav", "k")

    assert exc_info.value.message == message


def test_service_error_keeps_status(post_calls, transcriber):
    post_calls["responder"] = FakeResponse(502, "Bad Gateway")

    with pytest.raises(ServiceError) as exc_info:
        transcriber.transcribe(b"x", "a.wav", "audio/wav", "k")

    assert exc_info.value.status == 502


@pytest.mark.parametrize("exc", [requests.ReadTimeout("read timed out"), requests.ConnectionError("refused")])
def test_transport_timeouts(post_calls, transcriber, exc):
    post_calls["responder"] = exc

    with pytest.raises(TranscriptionTimeout):
        transcriber.transcribe(b"x", "a.wav", "audio/wav", "k")


def test_other_transport_errors(post_calls, transcriber):
    post_calls["responder"] = requests.TooManyRedirects("loop")

    with pytest.raises(ServiceError):
        transcriber.transcribe(b"x", "a.wav", "audio/wav", "k")


def test_no_retry_on_failure(post_calls, transcriber):
    post_calls["responder"] = FakeResponse(500, {"error": "boom"})

    with pytest.raises(ServiceError):
        transcriber.transcribe(b"x", "a.wav", "audio/wav", "k")

    assert len(post_calls["calls"]) == 1


def test_transcribe_segment_tags_fragment(post_calls, transcriber):
    segment = AudioSegment(payload=b"RIFF", start_ms=30000, end_ms=60000, sequence_index=1)

    fragment = transcribe_segment(segment, "k", transcriber)

    assert fragment.text == "hello"
    assert (fragment.start_ms, fragment.end_ms, fragment.sequence_index) == (30000, 60000, 1)
    _, kwargs = post_calls["calls"][0]
    assert kwargs["files"]["file"][0] == "chunk_1.wav"


def test_transcribe_media_sends_original_file(post_calls, transcriber):
    media = MediaFile(name="memo.m4a", mime_type="audio/mp4", data=b"original")

    fragment = transcribe_media(media, "k", 42000, transcriber)

    assert fragment.sequence_index == 0
    assert (fragment.start_ms, fragment.end_ms) == (0, 42000)
    _, kwargs = post_calls["calls"][0]
    assert kwargs["files"]["file"] == ("memo.m4a", b"original", "audio/mp4")
