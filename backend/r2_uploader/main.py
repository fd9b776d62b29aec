import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from r2_uploader.api.cors import PermissiveCORSMiddleware
from r2_uploader.api.routers import health as health_router
from r2_uploader.api.routers import pages as pages_router
from r2_uploader.api.routers import uploads as uploads_router
from r2_uploader.core.config import get_settings
from r2_uploader.services.storage import StorageService
from r2_uploader.services.uploads import UploadService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    storage = StorageService(settings)
    async with httpx.AsyncClient(timeout=settings.relay_upload_timeout) as http_client:
        app.state.upload_service = UploadService(storage, http_client)
        logger.info("R2 uploader started (bucket=%s)", settings.r2_bucket)
        yield


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Invalid request body"},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        debug=settings.debug,
        title="R2 Uploader API",
        lifespan=lifespan,
    )

    app.add_middleware(PermissiveCORSMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(pages_router.router)
    app.include_router(uploads_router.router)
    app.include_router(health_router.router)

    return app


app = create_app()
