from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from chunkscribe.core.jobs.domain.models import FileJob
from chunkscribe.core.jobs.service.manager import JobManager
from chunkscribe.features.intake.service.api import accept_file
from ..domain.models import PipelineConfig, RunSummary
from .orchestrator import JobListener, TranscriptionPipeline

def transcribe_files(paths: Iterable[Path], credential: str,
                     config: Optional[PipelineConfig] = None,
                     on_update: Optional[JobListener] = None,
                     jobs: Optional[JobManager] = None) -> Tuple[RunSummary, List[FileJob]]:
    """
    Standalone API: loads the files, runs the pipeline once and returns
    the summary plus the final state of every job in the working set.
    """
    jobs = jobs or JobManager()
    for path in paths:
        jobs.add_file(accept_file(path))

    pipeline = TranscriptionPipeline(jobs, config=config, on_update=on_update)
    summary = pipeline.run(credential)
    return summary, jobs.list_jobs()
