"""Download use cases."""

from .get_download_status import (
    DownloadStatusResponse,
    GetDownloadStatusRequest,
    GetDownloadStatusUseCase,
)
from .record_download import RecordDownloadRequest, RecordDownloadUseCase

__all__ = [
    "DownloadStatusResponse",
    "GetDownloadStatusRequest",
    "GetDownloadStatusUseCase",
    "RecordDownloadRequest",
    "RecordDownloadUseCase",
]
