from r2_uploader.schemas.health import EnvironmentPresence, HealthResponse
from r2_uploader.schemas.storage import (
    DownloadUrlRequest,
    DownloadUrlResponse,
    ErrorResponse,
    RelayUploadResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)

__all__ = [
    "UploadUrlRequest",
    "UploadUrlResponse",
    "DownloadUrlRequest",
    "DownloadUrlResponse",
    "RelayUploadResponse",
    "ErrorResponse",
    "EnvironmentPresence",
    "HealthResponse",
]
