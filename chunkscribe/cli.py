# File: chunkscribe/cli.py

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from chunkscribe.core.config.settings import settings
from chunkscribe.core.common.enums import JobStatus
from chunkscribe.core.errors import FileRejected
from chunkscribe.core.jobs.domain.models import FileJob
from chunkscribe.core.jobs.service.manager import JobManager
from chunkscribe.features.export.service.api import write_transcripts
from chunkscribe.features.export.service.formatting import format_file_size
from chunkscribe.features.intake.service.api import accept_file
from chunkscribe.features.pipeline.domain.models import PipelineConfig
from chunkscribe.features.pipeline.service.orchestrator import TranscriptionPipeline

logger = logging.getLogger(__name__)


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="chunkscribe",
        description="Transcribe audio/video files with ElevenLabs, splitting long recordings into chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s interview.mp3 --api-key YOUR_KEY
  %(prog)s *.m4a --chunk-seconds 120 --split-threshold-seconds 300 --out transcripts/
        """
    )

    parser.add_argument("input_files", nargs="+", metavar="FILE", help="Audio or video file(s) to transcribe")
    parser.add_argument(
        "--api-key", "-k",
        default=os.getenv("ELEVENLABS_API_KEY"),
        metavar="KEY",
        help="ElevenLabs API key (default: $ELEVENLABS_API_KEY)"
    )
    parser.add_argument(
        "--out", "-o",
        type=Path,
        default=settings.OUTPUT_DIR,
        metavar="DIR",
        help=f"Directory for .txt transcripts (default: {settings.OUTPUT_DIR})"
    )
    parser.add_argument(
        "--chunk-seconds", "-c",
        type=float,
        default=settings.CHUNK_DURATION_SECONDS,
        metavar="SECONDS",
        help=f"Duration of each chunk (default: {settings.CHUNK_DURATION_SECONDS:g})"
    )
    parser.add_argument(
        "--split-threshold-seconds",
        type=float,
        default=settings.SPLIT_THRESHOLD_SECONDS,
        metavar="SECONDS",
        help=f"Split files longer than this (default: {settings.SPLIT_THRESHOLD_SECONDS:g})"
    )
    parser.add_argument(
        "--stop-on-invalid-key",
        action="store_true",
        help="Stop the run at the first 401 instead of trying the remaining files"
    )
    return parser.parse_args(args)


def print_progress(job: FileJob) -> None:
    if job.status == JobStatus.TRANSCRIBING and job.is_split:
        print(f"  {job.file_name}: chunk {job.current_segment or 0}/{job.segment_count}")
    elif job.status == JobStatus.TRANSCRIBING and job.current_segment is None and job.duration_ms is None:
        print(f"  {job.file_name}: transcribing...")
    elif job.status == JobStatus.COMPLETED:
        print(f"  {job.file_name}: completed")
    elif job.status == JobStatus.FAILED:
        print(f"  {job.file_name}: failed")


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parsed = parse_args(args)
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not parsed.api_key:
        print("Please provide an API key (--api-key or ELEVENLABS_API_KEY).", file=sys.stderr)
        return 1

    jobs = JobManager()
    for path in parsed.input_files:
        try:
            media = accept_file(Path(path))
        except (FileRejected, FileNotFoundError) as e:
            print(f"Skipping {path}: {e}", file=sys.stderr)
            continue
        jobs.add_file(media)
        print(f"Added {media.name} ({format_file_size(media.size_bytes)})")

    if not jobs.list_jobs():
        print("No files to transcribe.", file=sys.stderr)
        return 1

    config = PipelineConfig(
        split_threshold_ms=parsed.split_threshold_seconds * 1000,
        chunk_duration_ms=parsed.chunk_seconds * 1000,
        abort_on_invalid_credential=parsed.stop_on_invalid_key,
    )
    summary = TranscriptionPipeline(jobs, config=config, on_update=print_progress).run(parsed.api_key)

    for outcome in summary.failed:
        print(outcome.message, file=sys.stderr)

    for path in write_transcripts(jobs.list_jobs(), parsed.out):
        print(f"Wrote {path}")

    return 0 if summary.ok else 1


if __name__ == "__main__":
    sys.exit(main())
