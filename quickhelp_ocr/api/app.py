"""FastAPI application for the QuickHelp OCR service.

Accepts identity-card uploads, runs OCR over them, and serves the
stored uploads back as static files.
"""

import shutil
from pathlib import Path
from typing import Annotated

from fastapi import FastAPI, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import UploadFile as StarletteUploadFile

from quickhelp_ocr.exceptions import (
    PreprocessingError,
    RecognitionError,
    StorageError,
)
from quickhelp_ocr.ocr.pipeline import OCRPipeline
from quickhelp_ocr.storage.uploads import UploadedFile, UploadStore
from quickhelp_ocr.utils.config import AppConfig, load_config
from quickhelp_ocr.utils.logger import get_logger

from .schemas import CnicResponse, HealthResponse, MessageResponse, TextResponse

logger = get_logger(__name__)

VERSION = "1.0.0"
NO_FILE_MESSAGE = "No image file uploaded"
EXTRACTION_FAILED_MESSAGE = "Failed to extract text from image"

_RESPONSES = {
    400: {"model": MessageResponse},
    500: {"model": MessageResponse},
}


def _is_file(image: object) -> bool:
    """Whether a form value is an uploaded file part with a filename."""
    return isinstance(image, StarletteUploadFile) and bool(image.filename)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration. Loaded from
            ``configs/config.yaml`` when omitted.

    Returns:
        Configured FastAPI application.
    """
    config = config or load_config()
    store = UploadStore(config.storage)
    upload_dir = store.ensure_dir()

    app = FastAPI(
        title="QuickHelp OCR API",
        description="Extract text and CNIC numbers from identity-card images",
        version=VERSION,
    )
    app.state.config = config
    app.state.store = store
    app.state.pipeline = OCRPipeline(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    async def _store(image: UploadFile) -> UploadedFile:
        content = await image.read()
        return await run_in_threadpool(
            store.save, content, image.filename or "", image.content_type
        )

    def _preprocess_target(uploaded: UploadedFile) -> Path | None:
        if not config.preprocessing.enabled_for_api:
            return None
        return app.state.pipeline.preprocessor.default_destination(uploaded.path)

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Return system health status."""
        return HealthResponse(
            status="healthy",
            version=VERSION,
            tesseract_available=shutil.which("tesseract") is not None,
        )

    @app.post("/extract-text", response_model=TextResponse, responses=_RESPONSES)
    async def extract_text(
        image: Annotated[UploadFile | str | None, File()] = None,
    ) -> TextResponse | JSONResponse:
        """Run OCR over an uploaded image and return the recognized text.

        Args:
            image: Uploaded image file. Plain form values are rejected.

        Returns:
            Recognized text, or a fixed error message.
        """
        if not _is_file(image):
            return _error(400, NO_FILE_MESSAGE)

        try:
            uploaded = await _store(image)
        except StorageError as exc:
            logger.error("Upload error: %s", exc)
            return _error(500, EXTRACTION_FAILED_MESSAGE)

        preprocessed = _preprocess_target(uploaded)
        try:
            result = await run_in_threadpool(
                app.state.pipeline.extract_text,
                uploaded.path,
                preprocess=preprocessed is not None,
                preprocessed_path=preprocessed,
            )
        except (PreprocessingError, RecognitionError) as exc:
            logger.error("OCR error: %s", exc)
            return _error(500, EXTRACTION_FAILED_MESSAGE)
        finally:
            store.release(uploaded, preprocessed)

        return TextResponse(text=result.text)

    @app.post("/extract-cnic", response_model=CnicResponse, responses=_RESPONSES)
    async def extract_cnic(
        image: Annotated[UploadFile | str | None, File()] = None,
        lenient: Annotated[bool, Query()] = False,
    ) -> CnicResponse | JSONResponse:
        """Run OCR over an uploaded identity card and extract its CNIC number.

        Args:
            image: Uploaded image file. Plain form values are rejected.
            lenient: Also accept CNIC numbers whose dashes were lost.

        Returns:
            Recognized text and the CNIC number (``null`` if not found).
        """
        if not _is_file(image):
            return _error(400, NO_FILE_MESSAGE)

        try:
            uploaded = await _store(image)
        except StorageError as exc:
            logger.error("Upload error: %s", exc)
            return _error(500, EXTRACTION_FAILED_MESSAGE)

        try:
            result, cnic = await run_in_threadpool(
                app.state.pipeline.extract_cnic,
                uploaded.path,
                preprocess=config.preprocessing.enabled_for_api,
                lenient=lenient,
            )
        except (PreprocessingError, RecognitionError) as exc:
            logger.error("OCR error: %s", exc)
            return _error(500, EXTRACTION_FAILED_MESSAGE)
        finally:
            store.release(uploaded, _preprocess_target(uploaded))

        return CnicResponse(text=result.text, cnic=cnic.value if cnic else None)

    return app
