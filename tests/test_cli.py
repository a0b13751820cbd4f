import pytest

from chunkscribe import cli
from chunkscribe.core.errors import InvalidCredential
from chunkscribe.features.chunking.data.wav_encoder import WavEncoder
from chunkscribe.features.chunking.service.partitioner import ChunkPartitioner
from chunkscribe.features.pipeline.service.orchestrator import TranscriptionPipeline


@pytest.fixture
def wired(monkeypatch, job_manager, fakes):
    """
    Points the CLI at an isolated job store and fake adapters.
    Returns the transcriber so tests can inspect or fail calls.
    """
    durations = {"short.mp3": 20_000, "long.mp3": 70_000}
    transcriber = fakes.Transcriber()

    def pipeline_factory(jobs, config=None, on_update=None):
        return TranscriptionPipeline(
            jobs,
            prober=fakes.Prober(durations),
            partitioner=ChunkPartitioner(decoder=fakes.Decoder(durations), encoder=WavEncoder()),
            transcriber=transcriber,
            config=config,
            on_update=on_update,
        )

    monkeypatch.setattr(cli, "JobManager", lambda: job_manager)
    monkeypatch.setattr(cli, "TranscriptionPipeline", pipeline_factory)
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    return transcriber


def _inputs(tmp_path):
    paths = []
    for name in ("short.mp3", "long.mp3"):
        path = tmp_path / name
        path.write_bytes(b"\x00" * 64)
        paths.append(str(path))
    return paths


def test_cli_transcribes_and_writes(wired, tmp_path, capsys):
    out = tmp_path / "out"

    code = cli.main(_inputs(tmp_path) + ["--api-key", "sk-1", "--out", str(out), "--chunk-seconds", "30"])

    assert code == 0
    assert [c[0] for c in wired.calls] == ["short.mp3", "chunk_0.wav", "chunk_1.wav", "chunk_2.wav"]
    assert (out / "short.txt").read_text(encoding="utf-8") == "short.mp3 text"
    assert (out / "long.txt").read_text(encoding="utf-8").count("\n\n") == 2
    assert "long.mp3: chunk 3/3" in capsys.readouterr().out


def test_cli_reports_failures(wired, tmp_path, capsys):
    wired.failures[1] = InvalidCredential("Invalid API key")

    code = cli.main(_inputs(tmp_path) + ["-k", "sk-bad", "-o", str(tmp_path / "out"), "--stop-on-invalid-key"])

    assert code == 1
    assert "Invalid ElevenLabs API key." in capsys.readouterr().err
    assert len(wired.calls) == 1


def test_cli_requires_api_key(wired, tmp_path, capsys):
    assert cli.main(_inputs(tmp_path)) == 1
    assert "API key" in capsys.readouterr().err


def test_cli_skips_missing_files(wired, tmp_path, capsys):
    code = cli.main([str(tmp_path / "ghost.mp3"), "-k", "sk-1", "-o", str(tmp_path)])

    assert code == 1
    err = capsys.readouterr().err
    assert "Skipping" in err
    assert "No files to transcribe." in err
