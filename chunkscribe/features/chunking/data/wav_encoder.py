import struct
import numpy as np

from ..domain.interfaces import IContainerEncoder

WAV_HEADER_SIZE = 44
PCM_FORMAT_TAG = 1
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8

# Negative samples scale by full scale, positive by full scale - 1, so +1.0 never overflows
NEGATIVE_SCALE = 0x8000
POSITIVE_SCALE = 0x7FFF


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """
    Converts float samples to int16 with the asymmetric scaling above.
    Values are clamped to [-1, 1] and truncated toward zero; NaN becomes silence.
    """
    values = np.nan_to_num(np.asarray(samples, dtype=np.float64), nan=0.0)
    clamped = np.clip(values, -1.0, 1.0)
    scaled = np.where(clamped < 0, clamped * NEGATIVE_SCALE, clamped * POSITIVE_SCALE)
    return np.trunc(scaled).astype(np.int16)
    return np.where(values < 0, values / NEGATIVE_SCALE, values / POSITIVE_SCALE).astype(np.float32)


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    """
    Serializes (channels, frames) float samples as a 16-bit PCM RIFF/WAVE file.

    Layout:
        44-byte header (RIFF, fmt  chunk of size 16, data chunk header)
        followed by frame-interleaved little-endian int16 samples.
    """
    samples = np.atleast_2d(samples)
    channels, frames = samples.shape
    data_size = frames * channels * BYTES_PER_SAMPLE
    block_align = channels * BYTES_PER_SAMPLE
    byte_rate = sample_rate * block_align

    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT_TAG,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )

    # (channels, frames) -> (frames, channels) -> flat: one frame after another
    interleaved = float_to_pcm16(samples).T.reshape(-1)
    return header + interleaved.astype("<i2").tobytes()


class WavEncoder(IContainerEncoder):
    def encode(self, samples: np.ndarray, sample_rate: int) -> bytes:
        return encode_wav(samples, sample_rate)
