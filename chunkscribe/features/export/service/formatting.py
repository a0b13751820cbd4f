from datetime import date
from typing import Iterable

from chunkscribe.core.common.enums import JobStatus
from chunkscribe.core.jobs.domain.models import FileJob

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]
SECTION_RULE = "─" * 50


def format_file_size(size_bytes: int) -> str:
    """Converts 1536 -> '1.5 KB' (base 1024, at most two decimals)."""
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while size_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size_bytes / (1024 ** exponent), 2)
    # 2.0 -> "2", 1.5 -> "1.5"
    return f"{value:g} {_SIZE_UNITS[exponent]}"


def transcript_filename(file_name: str) -> str:
    """'meeting.final.mp3' -> 'meeting.txt'"""
    stem = file_name.split(".")[0] or "transcript"
    return f"{stem}.txt"


def combined_filename(day: date) -> str:
    return f"all_transcriptions_{day.isoformat()}.txt"


def combine_transcripts(jobs: Iterable[FileJob]) -> str:
    """
    Builds one document from every completed job, in the order given:

        === name ===

        transcript

        ──────── (between files)
    """
    completed = [j for j in jobs if j.status == JobStatus.COMPLETED and j.transcript]
    if not completed:
        raise ValueError("No completed transcriptions to download.")

    parts = []
    for i, job in enumerate(completed):
        parts.append(f"=== {job.file_name} ===\n\n")
        parts.append(job.transcript)
        parts.append("\n\n")
        if i < len(completed) - 1:
            parts.append(SECTION_RULE + "\n\n")
    return "".join(parts)
