# File: chunkscribe/core/common/enums.py

from enum import Enum, unique

@unique
class FileType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    UNKNOWN = "unknown"

@unique
class JobStatus(str, Enum):
    PENDING = "pending"
    TRANSCRIBING = "transcribing"
    COMPLETED = "completed"
    FAILED = "failed"

@unique
class FailureReason(str, Enum):
    DECODE_ERROR = "decode_error"
    TIMEOUT = "timeout"
    INVALID_CREDENTIAL = "invalid_credential"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    BAD_INPUT = "bad_input"
    SERVICE_ERROR = "service_error"
