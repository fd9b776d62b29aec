import logging
from typing import Final
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from r2_uploader.core.config import Settings

logger = logging.getLogger(__name__)

PRESIGNED_URL_EXPIRY: Final[int] = 3600
DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"

# Characters encodeURIComponent leaves untouched beyond quote()'s own set.
_URI_COMPONENT_SAFE: Final[str] = "!*'()"


class StorageError(Exception):
    """Raised when the object store refuses to sign a request."""


def encode_key(key: str) -> str:
    return quote(key, safe=_URI_COMPONENT_SAFE)


class StorageService:
    """Cloudflare R2 (S3-compatible) signing backend."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            endpoint_url=settings.r2_endpoint or None,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.r2_region,
            config=Config(signature_version="s3v4"),
        )
        self.bucket = settings.r2_bucket

    def public_url(self, key: str) -> str:
        """Predict the public address of ``key``; the backend is not consulted."""
        return f"{self.settings.public_base_url}/{encode_key(key)}"

    def create_presigned_put(
        self,
        key: str,
        content_type: str = DEFAULT_CONTENT_TYPE,
        expires_in: int = PRESIGNED_URL_EXPIRY,
    ) -> str:
        return self._presign(
            "put_object",
            {"Bucket": self.bucket, "Key": key, "ContentType": content_type},
            expires_in,
        )

    def create_presigned_get(self, key: str, expires_in: int = PRESIGNED_URL_EXPIRY) -> str:
        return self._presign("get_object", {"Bucket": self.bucket, "Key": key}, expires_in)

    def _presign(self, operation: str, params: dict, expires_in: int) -> str:
        try:
            url = self.client.generate_presigned_url(
                operation,
                Params=params,
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
        logger.info("Presigned %s for key %s (%ss)", operation, params["Key"], expires_in)
        return url
