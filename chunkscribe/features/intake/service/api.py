import logging
from pathlib import Path
from typing import Optional

from chunkscribe.core.errors import FileRejected
from chunkscribe.core.shared_types import MediaFile
from chunkscribe.features.export.service.formatting import format_file_size
from ..domain.models import IntakeLimits

logger = logging.getLogger(__name__)

def accept_file(path: Path, limits: Optional[IntakeLimits] = None) -> MediaFile:
    """
    Reads a file selected by the user into memory.
    - Rejects files above the upload ceiling (FileRejected).
    - Accepts, with a logged warning, files large enough that the service may time out.
    """
    limits = limits or IntakeLimits()
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    size = path.stat().st_size
    if size > limits.max_bytes:
        raise FileRejected(
            f"{path.name} is {format_file_size(size)}; the limit is {format_file_size(limits.max_bytes)}."
        )
    if size > limits.warn_bytes:
        logger.warning(
            f"Warning: {path.name} is very large ({format_file_size(size)}). "
            f"This may time out on the server. Consider using a smaller file."
        )

    return MediaFile.from_path(path)
