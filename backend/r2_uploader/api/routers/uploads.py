import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from r2_uploader.api.deps import get_upload_service
from r2_uploader.schemas import (
    DownloadUrlRequest,
    DownloadUrlResponse,
    ErrorResponse,
    RelayUploadResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)
from r2_uploader.services.uploads import UploadService

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["uploads"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


@router.post("/generate-upload-url", response_model=UploadUrlResponse)
async def generate_upload_url(
    payload: UploadUrlRequest,
    uploads: UploadService = Depends(get_upload_service),
) -> UploadUrlResponse:
    if not payload.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required")

    try:
        issued = uploads.issue_upload_url(payload.filename, payload.content_type)
    except Exception as exc:
        logger.exception("Error generating presigned upload URL for %s", payload.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc) or "Failed to generate presigned URL",
        ) from exc

    return UploadUrlResponse(
        presigned_url=issued.presigned_url,
        public_url=issued.public_url,
        filename=issued.filename,
    )


@router.post("/generate-download-url", response_model=DownloadUrlResponse)
async def generate_download_url(
    payload: DownloadUrlRequest,
    uploads: UploadService = Depends(get_upload_service),
) -> DownloadUrlResponse:
    if not payload.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required")

    try:
        issued = uploads.issue_download_url(payload.filename)
    except Exception as exc:
        logger.exception("Error generating presigned download URL for %s", payload.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc) or "Failed to generate download URL",
        ) from exc

    return DownloadUrlResponse(presigned_url=issued.presigned_url, filename=issued.filename)


@router.post("/upload", response_model=RelayUploadResponse)
async def relay_upload(
    file: UploadFile | None = File(default=None),
    uploads: UploadService = Depends(get_upload_service),
) -> RelayUploadResponse:
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    data = await file.read()
    try:
        relayed = await uploads.relay_upload(file.filename, data, file.content_type)
    except Exception as exc:
        logger.exception("Relay upload of %s failed", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc) or "Upload failed",
        ) from exc

    return RelayUploadResponse(
        video_url=relayed.public_url,
        filename=relayed.filename,
        size=relayed.size,
        content_type=relayed.content_type,
    )
