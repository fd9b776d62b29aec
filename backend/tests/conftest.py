import os
import sys
from pathlib import Path
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from r2_uploader.core.config import Settings, get_settings
from r2_uploader.services.storage import (
    DEFAULT_CONTENT_TYPE,
    PRESIGNED_URL_EXPIRY,
    StorageService,
    encode_key,
)
from r2_uploader.services.uploads import UploadService

PUBLIC_URL = "https://cdn.example.com"
STORAGE_HOST = "https://storage.test"


class DummyStorage(StorageService):
    """Signs nothing; hands out unique fake URLs and records every call."""

    def __init__(self, settings: Settings) -> None:  # type: ignore[super-init-not-called]
        self.settings = settings
        self.bucket = "test-bucket"
        self.calls: list[tuple] = []
        self.error: Exception | None = None

    def _fake_url(self, key: str, expires_in: int) -> str:
        if self.error is not None:
            raise self.error
        return (
            f"{STORAGE_HOST}/{self.bucket}/{encode_key(key)}"
            f"?X-Amz-Expires={expires_in}&X-Amz-Signature={uuid4().hex}"
        )

    def create_presigned_put(  # type: ignore[override]
        self,
        key: str,
        content_type: str = DEFAULT_CONTENT_TYPE,
        expires_in: int = PRESIGNED_URL_EXPIRY,
    ) -> str:
        self.calls.append(("put_object", key, content_type, expires_in))
        return self._fake_url(key, expires_in)

    def create_presigned_get(  # type: ignore[override]
        self, key: str, expires_in: int = PRESIGNED_URL_EXPIRY
    ) -> str:
        self.calls.append(("get_object", key, expires_in))
        return self._fake_url(key, expires_in)


class FakeObjectStore:
    """Receives relayed PUTs through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.status_code = 200
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)


@pytest.fixture(scope="session", autouse=True)
def configure_environment():
    os.environ["R2_ENDPOINT"] = "https://account.r2.cloudflarestorage.com"
    os.environ["AWS_ACCESS_KEY_ID"] = "test"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "test"
    os.environ["R2_BUCKET"] = "test-bucket"
    os.environ["R2_PUBLIC_URL"] = PUBLIC_URL
    os.environ["ENV"] = "test"
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage() -> DummyStorage:
    return DummyStorage(get_settings())


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest_asyncio.fixture
async def app_instance(storage, object_store):
    from r2_uploader.main import create_app

    app = create_app()

    # Setup state for tests, mimicking lifespan events
    async with AsyncClient(transport=httpx.MockTransport(object_store)) as http_client:
        app.state.upload_service = UploadService(storage, http_client)
        yield app


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
