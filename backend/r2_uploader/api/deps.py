from fastapi import Request

from r2_uploader.services.uploads import UploadService


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
