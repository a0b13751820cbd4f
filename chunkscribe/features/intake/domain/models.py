from dataclasses import dataclass
from chunkscribe.core.config.settings import settings

@dataclass(frozen=True)
class IntakeLimits:
    """
    Upload ceilings enforced before a file enters the working set.
    """
    max_bytes: int = int(settings.MAX_UPLOAD_MB * 1024 * 1024)
    warn_bytes: int = int(settings.LARGE_FILE_WARNING_MB * 1024 * 1024)

    def __post_init__(self):
        if self.warn_bytes > self.max_bytes:
            raise ValueError("Warning threshold cannot exceed the upload ceiling.")
