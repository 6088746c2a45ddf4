"""Configuration management for the QuickHelp OCR service.

Loads and validates YAML configuration with sensible defaults
for preprocessing, OCR, upload storage, the HTTP server, and
face comparison settings.
"""

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class PreprocessingConfig(BaseModel):
    """Configuration for the resize/grayscale preprocessing step."""

    target_width: int = Field(default=800, gt=0)
    grayscale: bool = True
    enabled_for_api: bool = False
    enabled_for_cli: bool = True


class OCRConfig(BaseModel):
    """Configuration for Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 6
    oem: int = 3


class StorageConfig(BaseModel):
    """Configuration for the uploads directory and its retention policy."""

    upload_dir: str = "uploads"
    retention: Literal["keep", "delete_after_response", "ttl"] = "ttl"
    ttl_seconds: int = Field(default=86400, gt=0)


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 5000


class FaceConfig(BaseModel):
    """Configuration for the OpenCV face comparison helper."""

    detector_model: str = "models/face_detection_yunet_2023mar.onnx"
    recognizer_model: str = "models/face_recognition_sface_2021dec.onnx"
    score_threshold: float = 0.9
    distance_threshold: float = 1.128


class AppConfig(BaseModel):
    """Top-level application configuration."""

    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    face: FaceConfig = Field(default_factory=FaceConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    The ``PORT`` environment variable, when set, overrides ``server.port``.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        config = AppConfig(**raw)
    else:
        logger.info("No config file found at %s, using defaults", path)
        config = AppConfig()

    port = os.environ.get("PORT")
    if port:
        config.server.port = int(port)
    return config
