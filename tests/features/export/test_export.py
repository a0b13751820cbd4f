import uuid
from datetime import date
import pytest

from chunkscribe.core.common.enums import JobStatus, FailureReason
from chunkscribe.core.jobs.domain.models import FileJob
from chunkscribe.features.export.service.api import ExportService
from chunkscribe.features.export.service.formatting import (
    SECTION_RULE,
    combine_transcripts,
    combined_filename,
    format_file_size,
    transcript_filename,
)


def _job(name, status=JobStatus.COMPLETED, transcript="text", **kwargs):
    return FileJob(id=uuid.uuid4(), file_name=name, mime_type="audio/mpeg", size_bytes=10,
                   status=status, transcript=transcript, **kwargs)


@pytest.mark.parametrize("size,expected", [
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (2 * 1024 * 1024, "2 MB"),
    (int(1.234 * 1024 ** 3), "1.23 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


@pytest.mark.parametrize("name,expected", [
    ("interview.mp3", "interview.txt"),
    ("meeting.final.m4a", "meeting.txt"),
    ("noext", "noext.txt"),
    (".hidden", "transcript.txt"),
])
def test_transcript_filename(name, expected):
    assert transcript_filename(name) == expected


def test_combined_filename():
    assert combined_filename(date(2024, 3, 9)) == "all_transcriptions_2024-03-09.txt"


def test_combine_transcripts_layout():
    jobs = [
        _job("a.mp3", transcript="alpha"),
        _job("b.mp3", status=JobStatus.FAILED, transcript=None, failure_reason=FailureReason.TIMEOUT),
        _job("c.mp3", transcript="gamma"),
    ]

    combined = combine_transcripts(jobs)

    assert combined == (
        "=== a.mp3 ===\n\nalpha\n\n"
        f"{SECTION_RULE}\n\n"
        "=== c.mp3 ===\n\ngamma\n\n"
    )
    assert len(SECTION_RULE) == 50


def test_combine_without_completed_jobs():
    with pytest.raises(ValueError):
        combine_transcripts([_job("x.mp3", status=JobStatus.PENDING, transcript=None)])


def test_write_transcripts(tmp_path):
    jobs = [_job("one.mp3", transcript="first"), _job("two.wav", transcript="second"),
            _job("three.mp3", status=JobStatus.TRANSCRIBING, transcript=None)]

    written = ExportService().write_transcripts(jobs, tmp_path, day=date(2024, 1, 2))

    assert [p.name for p in written] == ["one.txt", "two.txt", "all_transcriptions_2024-01-02.txt"]
    assert (tmp_path / "one.txt").read_text(encoding="utf-8") == "first"
    assert "=== two.wav ===" in (tmp_path / "all_transcriptions_2024-01-02.txt").read_text(encoding="utf-8")


def test_existing_files_are_not_overwritten(tmp_path):
    (tmp_path / "one.txt").write_text("keep me")

    written = ExportService().write_transcripts([_job("one.mp3", transcript="new")], tmp_path, day=date(2024, 1, 2))

    assert written[0].name == "one_1.txt"
    assert (tmp_path / "one.txt").read_text() == "keep me"


def test_nothing_to_write(tmp_path):
    assert ExportService().write_transcripts([_job("x.mp3", status=JobStatus.FAILED, transcript=None)], tmp_path) == []
    assert list(tmp_path.iterdir()) == []
