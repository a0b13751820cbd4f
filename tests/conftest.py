# File: tests/conftest.py

import pytest
import os
import sys
import shutil
import subprocess
from types import SimpleNamespace
import numpy as np
from sqlalchemy.orm import sessionmaker

# 1. Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chunkscribe.core.database.connection import build_engine
from chunkscribe.core.errors import DecodeError
from chunkscribe.core.jobs.data.repository import SqlJobRepo
from chunkscribe.core.jobs.service.manager import JobManager
from chunkscribe.core.shared_types import MediaFile
from chunkscribe.features.chunking.domain.interfaces import IAudioDecoder
from chunkscribe.features.chunking.domain.models import DecodedAudio
from chunkscribe.features.probing.domain.interfaces import IDurationProber
from chunkscribe.features.probing.domain.models import StreamInfo
from chunkscribe.features.transcription.domain.interfaces import ITranscriber

HAS_FFMPEG = shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None

# Low rate keeps 10-minute fakes small
FAKE_SAMPLE_RATE = 100


# --- Fakes ---

class FakeProber(IDurationProber):
    """Durations by file name; names missing from the table cannot be probed."""

    def __init__(self, durations_ms: dict):
        self.durations_ms = durations_ms
        self.calls = []

    def probe_duration_ms(self, media: MediaFile) -> float:
        self.calls.append(media.name)
        if media.name not in self.durations_ms:
            raise DecodeError(f"Cannot probe {media.name}")
        return self.durations_ms[media.name]

    def probe_stream_info(self, media: MediaFile) -> StreamInfo:
        return StreamInfo(sample_rate=FAKE_SAMPLE_RATE, channels=1)


class FakeDecoder(IAudioDecoder):
    """Synthesizes a mono ramp whose length matches the prober's table."""

    def __init__(self, durations_ms: dict, undecodable=()):
        self.durations_ms = durations_ms
        self.undecodable = set(undecodable)
        self.calls = []

    def decode(self, media: MediaFile) -> DecodedAudio:
        self.calls.append(media.name)
        if media.name in self.undecodable:
            raise DecodeError(f"Cannot decode {media.name}")
        frames = int(self.durations_ms.get(media.name, 0) / 1000 * FAKE_SAMPLE_RATE)
        samples = np.linspace(-1.0, 1.0, frames, dtype=np.float32).reshape(1, -1)
        return DecodedAudio(sample_rate=FAKE_SAMPLE_RATE, samples=samples)


class FakeTranscriber(ITranscriber):
    """
    Returns "<filename> text" for every call.
    `failures` maps a 1-based call number to the exception that call should raise.
    """

    def __init__(self, failures: dict = None):
        self.failures = failures or {}
        self.calls = []

    def transcribe(self, payload: bytes, filename: str, mime_type: str, credential: str) -> str:
        self.calls.append((filename, mime_type, credential))
        error = self.failures.get(len(self.calls))
        if error is not None:
            raise error
        return f"{filename} text"


# --- Fixtures ---

@pytest.fixture
def fakes():
    """Gives tests access to the fake adapters without importing conftest."""
    return SimpleNamespace(Prober=FakeProber, Decoder=FakeDecoder, Transcriber=FakeTranscriber)


@pytest.fixture
def job_manager():
    """A JobManager over its own in-memory database, isolated per test."""
    engine = build_engine("sqlite://")
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield JobManager(SqlJobRepo(factory))
    engine.dispose()


@pytest.fixture
def make_media():
    def _make(name: str = "clip.mp3", size: int = 1024, mime_type: str = "audio/mpeg") -> MediaFile:
        return MediaFile(name=name, mime_type=mime_type, data=b"\x00" * size)
    return _make


@pytest.fixture
def sine_file(tmp_path):
    """
    Generates a sine wave with FFmpeg. Skips the test when FFmpeg is not installed.
    """
    if not HAS_FFMPEG:
        pytest.skip("ffmpeg/ffprobe not installed")

    def _make(name: str = "tone.wav", seconds: float = 2.5, sample_rate: int = 8000, channels: int = 1, codec=None):
        path = tmp_path / name
        cmd = [
            "ffmpeg", "-y",
            "-f", "lavfi", "-i", f"sine=frequency=440:duration={seconds}:sample_rate={sample_rate}",
            "-ac", str(channels),
        ]
        if codec:
            cmd += ["-c:a", codec]
        cmd.append(str(path))
        subprocess.run(cmd, check=True, capture_output=True)
        return path

    return _make
