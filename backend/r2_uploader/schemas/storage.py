from pydantic import BaseModel, ConfigDict, Field


class UploadUrlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str | None = None
    content_type: str | None = Field(default=None, alias="contentType")


class DownloadUrlRequest(BaseModel):
    filename: str | None = None


class UploadUrlResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    presigned_url: str = Field(alias="presignedUrl")
    public_url: str = Field(alias="publicUrl")
    filename: str
    message: str = "Presigned URL generated successfully"


class DownloadUrlResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    presigned_url: str = Field(alias="presignedUrl")
    filename: str
    message: str = "Download URL generated successfully"


class RelayUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_url: str
    thumbnail_url: str = ""
    duration: str = ""
    message: str = "File uploaded successfully"
    filename: str
    size: int
    content_type: str = Field(alias="type")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
