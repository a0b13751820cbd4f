# File: chunkscribe/core/config/settings.py

import os
import shutil
from pathlib import Path


class Settings:
    # --- Paths ---
    # chunkscribe/core/config/settings.py -> chunkscribe/core/config -> chunkscribe/core -> chunkscribe -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    OUTPUT_DIR: Path = Path(os.getenv("CHUNKSCRIBE_OUTPUT_DIR", str(BASE_DIR / "transcripts")))

    # --- Working Set ---
    # The default is a process-local in-memory SQLite database: nothing survives the run.
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env vars
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # --- Transcription Service ---
    ELEVENLABS_API_URL: str = os.getenv("ELEVENLABS_API_URL", "https://api.elevenlabs.io/v1/speech-to-text")
    ELEVENLABS_MODEL_ID: str = os.getenv("ELEVENLABS_MODEL_ID", "scribe_v1")
    TRANSCRIPTION_TIMEOUT_SECONDS: float = float(os.getenv("TRANSCRIPTION_TIMEOUT_SECONDS", "300"))

    # --- Chunking Policy ---
    SPLIT_THRESHOLD_SECONDS: float = float(os.getenv("SPLIT_THRESHOLD_SECONDS", "60"))
    CHUNK_DURATION_SECONDS: float = float(os.getenv("CHUNK_DURATION_SECONDS", "30"))
    # Used only when the duration cannot be probed
    SIZE_FALLBACK_THRESHOLD_MB: float = float(os.getenv("SIZE_FALLBACK_THRESHOLD_MB", "10"))

    # --- Upload Limits ---
    MAX_UPLOAD_MB: float = float(os.getenv("MAX_UPLOAD_MB", "100"))
    LARGE_FILE_WARNING_MB: float = float(os.getenv("LARGE_FILE_WARNING_MB", "50"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
