"""Client-side upload flow.

Drives one of two mutually exclusive paths against the API:

* relay: POST the file to ``/upload`` and let the server PUT it to R2;
* direct: ask ``/generate-upload-url`` for a presigned PUT URL and send the
  bytes straight to object storage.

Progress is a coarse, hand-set percentage meant for display only.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class UploadState(str, Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OrchestratorBusyError(RuntimeError):
    """Raised when an upload is submitted while another one is in flight."""


class UploadFailed(Exception):
    """An upload step reported failure."""


@dataclass(frozen=True)
class SelectedFile:
    filename: str
    data: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> SelectedFile:
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            data=path.read_bytes(),
            content_type=content_type or DEFAULT_CONTENT_TYPE,
        )


@dataclass(frozen=True)
class UploadOutcome:
    message: str
    video_url: str
    filename: str | None = None
    size: int | None = None
    content_type: str | None = None


def _json_object(response: httpx.Response) -> dict:
    data = response.json()
    if not isinstance(data, dict):
        raise UploadFailed(f"Unexpected response from server (HTTP {response.status_code})")
    return data


ChangeListener = Callable[["UploadOrchestrator"], None]
UploadFlow = Callable[[SelectedFile], Awaitable[UploadOutcome]]


class UploadOrchestrator:
    """Upload state machine: IDLE -> SELECTING -> UPLOADING -> SUCCEEDED | FAILED.

    ``http_client`` must carry the API ``base_url``; presigned URLs are absolute
    and bypass it.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        on_change: ChangeListener | None = None,
    ) -> None:
        self.http_client = http_client
        self.on_change = on_change
        self.state = UploadState.IDLE
        self.file: SelectedFile | None = None
        self.result: UploadOutcome | None = None
        self.error: str | None = None
        self.progress = 0
        self.status = ""

    @property
    def is_uploading(self) -> bool:
        return self.state is UploadState.UPLOADING

    @property
    def can_submit(self) -> bool:
        return self.file is not None and not self.is_uploading

    def select_file(self, selected: SelectedFile | None) -> None:
        if self.is_uploading:
            raise OrchestratorBusyError("An upload is already in progress")
        self.file = selected
        self.result = None
        self.error = None
        self.status = ""
        self.state = UploadState.SELECTING
        self._notify()

    async def upload_via_server(self) -> UploadOutcome | None:
        return await self._run(self._relay)

    async def upload_via_presigned_url(self) -> UploadOutcome | None:
        return await self._run(self._direct)

    async def _run(self, flow: UploadFlow) -> UploadOutcome | None:
        if self.is_uploading:
            raise OrchestratorBusyError("An upload is already in progress")
        if self.file is None:
            self.error = "Please select a file"
            self._notify()
            return None

        self.state = UploadState.UPLOADING
        self.error = None
        self._set_progress(0, "")

        outcome: UploadOutcome | None = None
        try:
            outcome = await flow(self.file)
        except Exception as exc:
            logger.warning("Upload of %s failed: %s", self.file.filename, exc)
            self.error = f"Upload failed: {exc}"
            self.state = UploadState.FAILED
        else:
            self.result = outcome
            self.file = None
            self.state = UploadState.SUCCEEDED
        finally:
            self._set_progress(0, "")
        return outcome

    async def _relay(self, selected: SelectedFile) -> UploadOutcome:
        self._set_progress(25, "Uploading file to server...")
        response = await self.http_client.post(
            "/upload",
            files={"file": (selected.filename, selected.data, selected.content_type)},
        )

        self._set_progress(75, "Server processing and uploading to R2...")
        data = _json_object(response)
        if not data.get("success"):
            raise UploadFailed(data.get("error") or "Upload failed")

        self._set_progress(100, "Upload completed successfully!")
        return UploadOutcome(
            message="Upload successful via server!",
            video_url=data["video_url"],
            filename=data.get("filename"),
            size=data.get("size"),
            content_type=data.get("type"),
        )

    async def _direct(self, selected: SelectedFile) -> UploadOutcome:
        self._set_progress(0, "Generating presigned URL...")
        url_response = await self.http_client.post(
            "/generate-upload-url",
            json={"filename": selected.filename, "contentType": selected.content_type},
        )
        url_data = _json_object(url_response)
        if not url_data.get("success"):
            raise UploadFailed(url_data.get("error") or "Failed to generate upload URL")
        presigned_url = url_data.get("presignedUrl")
        if not isinstance(presigned_url, str) or not presigned_url:
            raise UploadFailed("Server did not return a presigned URL")

        self._set_progress(25, "Uploading file directly to R2...")
        upload_response = await self.http_client.put(
            presigned_url,
            content=selected.data,
            headers={"Content-Type": selected.content_type},
        )
        if not upload_response.is_success:
            raise UploadFailed(f"Upload failed with status: {upload_response.status_code}")

        self._set_progress(100, "Upload completed successfully!")
        # The public URL comes from the issuing call, not from storage.
        return UploadOutcome(
            message="Upload successful via presigned URL!",
            video_url=url_data["publicUrl"],
        )

    def _set_progress(self, progress: int, status: str) -> None:
        self.progress = progress
        self.status = status
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
