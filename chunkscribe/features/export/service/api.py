import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from chunkscribe.core.common.enums import JobStatus
from chunkscribe.core.config.settings import settings
from chunkscribe.core.jobs.domain.models import FileJob
from ..data.local_fs import LocalTranscriptWriter
from .formatting import combine_transcripts, combined_filename, transcript_filename

logger = logging.getLogger(__name__)

class ExportService:
    """
    Facade for the Export Feature.
    Writes one .txt per completed job plus a combined document.
    """
    def __init__(self):
        self.writer = LocalTranscriptWriter()

    def write_transcripts(self, jobs: Iterable[FileJob], out_dir: Optional[Path] = None,
                          day: Optional[date] = None) -> List[Path]:
        """
        Returns the paths written. Jobs that are not completed are ignored;
        nothing is written when there is nothing completed.
        """
        out_dir = Path(out_dir) if out_dir else settings.OUTPUT_DIR
        completed = [j for j in jobs if j.status == JobStatus.COMPLETED and j.transcript]
        if not completed:
            logger.warning("No completed transcriptions to write.")
            return []

        written = [
            self.writer.write_text(out_dir, transcript_filename(job.file_name), job.transcript)
            for job in completed
        ]

        combined = combine_transcripts(completed)
        written.append(self.writer.write_text(out_dir, combined_filename(day or date.today()), combined))

        logger.info(f"Wrote {len(written)} transcript file(s) to {out_dir}")
        return written

# Singleton Instance for easy import
exporter = ExportService()

def write_transcripts(jobs: Iterable[FileJob], out_dir: Optional[Path] = None) -> List[Path]:
    return exporter.write_transcripts(jobs, out_dir)
