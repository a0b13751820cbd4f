from dataclasses import dataclass

@dataclass(frozen=True)
class StreamInfo:
    """
    Layout of the first audio stream, as reported by the container.
    """
    sample_rate: int
    channels: int
