import logging
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from chunkscribe.core.common.enums import JobStatus, FailureReason
from chunkscribe.core.errors import ChunkscribeError, DecodeError, user_message
from chunkscribe.core.jobs.domain.models import FileJob
from chunkscribe.core.jobs.service.manager import JobManager
from chunkscribe.core.shared_types import MediaFile
from chunkscribe.features.chunking.domain.interfaces import IChunkPartitioner
from chunkscribe.features.chunking.domain.models import AudioSegment
from chunkscribe.features.probing.domain.interfaces import IDurationProber
from chunkscribe.features.transcription.domain.interfaces import ITranscriber
from chunkscribe.features.transcription.domain.models import TranscriptFragment
from chunkscribe.features.transcription.service.api import transcribe_media, transcribe_segment
from chunkscribe.features.transcription.service.merger import merge_fragments
from ..domain.models import FileOutcome, PipelineConfig, RunSummary

logger = logging.getLogger(__name__)

JobListener = Callable[[FileJob], None]


class TranscriptionPipeline:
    """
    The Brains.
    Walks the working set one file at a time: decide split vs. direct, submit segments
    in order, merge by sequence index, and record the result on the job.
    A failure ends that file only; the next file still runs.
    """

    def __init__(self,
                 jobs: JobManager,
                 prober: Optional[IDurationProber] = None,
                 partitioner: Optional[IChunkPartitioner] = None,
                 transcriber: Optional[ITranscriber] = None,
                 config: Optional[PipelineConfig] = None,
                 on_update: Optional[JobListener] = None):
        if prober is None:
            from chunkscribe.features.probing.data.ffprobe_adapter import FFprobeAdapter
            prober = FFprobeAdapter()
        if partitioner is None:
            from chunkscribe.features.chunking.service.partitioner import ChunkPartitioner
            partitioner = ChunkPartitioner()
        if transcriber is None:
            from chunkscribe.features.transcription.data.elevenlabs_adapter import ElevenLabsTranscriber
            transcriber = ElevenLabsTranscriber()

        self.jobs = jobs
        self.prober = prober
        self.partitioner = partitioner
        self.transcriber = transcriber
        self.config = config or PipelineConfig()
        self.on_update = on_update

    def run(self, credential: str) -> RunSummary:
        """
        Main entry point. Completed jobs are skipped, so a re-run only retries pending/failed files.
        """
        if not credential or not credential.strip():
            raise ValueError("An API key is required to transcribe.")

        summary = RunSummary()
        pending = self.jobs.list_jobs()
        logger.info(f"Pipeline: {len(pending)} file(s) in the working set")

        for job in pending:
            if job.status == JobStatus.COMPLETED:
                logger.info(f"Skipping {job.file_name}: already completed")
                summary.skipped.append(job.id)
                continue

            outcome = self.process_job(job.id, credential)
            summary.outcomes.append(outcome)

            if (self.config.abort_on_invalid_credential
                    and outcome.failure_reason == FailureReason.INVALID_CREDENTIAL):
                logger.warning("Invalid credential; leaving the remaining files untouched.")
                summary.aborted = True
                break

        logger.info(
            f"Pipeline finished: {len(summary.completed)} completed, "
            f"{len(summary.failed)} failed, {len(summary.skipped)} skipped"
        )
        return summary

    def process_job(self, job_id: UUID, credential: str) -> FileOutcome:
        """Runs one file from the start. Partial segment results never survive a failure."""
        name = self.jobs.get(job_id).file_name

        try:
            self._publish(self.jobs.start(job_id))
            media = self.jobs.media_for(job_id)
            logger.info(f"Starting {media.name} ({media.file_type.value}, {media.size_bytes} bytes)...")

            fragments = self._transcribe(job_id, media, credential)
            transcript = merge_fragments(fragments)

        except ChunkscribeError as e:
            message = user_message(e, name)
            logger.error(f"{name} failed [{e.reason.value}]: {e}")
            return FileOutcome.from_job(self._publish(self.jobs.fail(job_id, e.reason, message)))

        except Exception as e:
            # Execution error outside the known taxonomy
            message = user_message(ChunkscribeError(str(e)), name)
            logger.exception(f"{name} failed unexpectedly: {e}")
            return FileOutcome.from_job(self._publish(self.jobs.fail(job_id, FailureReason.SERVICE_ERROR, message)))

        done = self._publish(self.jobs.complete(job_id, transcript))
        logger.info(f"Successfully transcribed {media.name} ({len(fragments)} fragment(s))")
        return FileOutcome.from_job(done)

    # --- Steps ---

    def _transcribe(self, job_id: UUID, media: MediaFile, credential: str) -> List[TranscriptFragment]:
        segments, duration_ms = self._plan(job_id, media)

        if segments is None:
            return [transcribe_media(media, credential, duration_ms, self.transcriber)]

        count = len(segments)
        self._publish(self.jobs.update_progress(job_id, segment_count=count, current_segment=0))

        fragments: List[TranscriptFragment] = []
        for segment in sorted(segments, key=lambda s: s.sequence_index):
            position = segment.sequence_index + 1
            self._publish(self.jobs.update_progress(job_id, segment_count=count, current_segment=position))
            fragments.append(transcribe_segment(segment, credential, self.transcriber))
            logger.debug(f"Completed chunk {position}/{count} for {media.name}")

        return fragments

    def _plan(self, job_id: UUID, media: MediaFile) -> Tuple[Optional[List[AudioSegment]], Optional[float]]:
        """
        Decides split vs. direct submission.
        Returns (segments, duration_ms); segments is None when the whole file goes up as one request.
        """
        duration_ms: Optional[float] = None
        try:
            duration_ms = self.prober.probe_duration_ms(media)
        except DecodeError as e:
            is_long = media.size_bytes > self.config.size_fallback_threshold_bytes
            logger.warning(f"Could not probe {media.name} ({e}); size fallback says long={is_long}")
        else:
            self._publish(self.jobs.update_progress(job_id, duration_ms=duration_ms))
            is_long = duration_ms > self.config.split_threshold_ms

        if not is_long:
            return None, duration_ms

        logger.info(f"Splitting long file: {media.name} ({(duration_ms or 0) / 60000:.1f} minutes)")
        segments = self.partitioner.partition(media, self.config.chunk_duration_ms)
        if not segments:
            # Nothing decoded; behave as if no split happened
            return None, duration_ms
        return segments, duration_ms

    def _publish(self, job: FileJob) -> FileJob:
        if self.on_update is not None:
            self.on_update(job)
        return job
