"""Shared test fixtures for the QuickHelp OCR test suite."""

from pathlib import Path

import cv2
import numpy as np
import pytest

from quickhelp_ocr.utils.config import AppConfig, StorageConfig


@pytest.fixture
def sample_image() -> np.ndarray:
    """Create a simple synthetic BGR test image."""
    image = np.zeros((200, 400, 3), dtype=np.uint8)
    image[50:150, 50:350] = (255, 255, 255)
    return image


@pytest.fixture
def image_file(tmp_path: Path, sample_image: np.ndarray) -> Path:
    """Write the sample image to a JPEG file."""
    path = tmp_path / "nic.jpg"
    cv2.imwrite(str(path), sample_image)
    return path


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    """Create a plain text file that is not an image."""
    path = tmp_path / "notes.txt"
    path.write_text("definitely not an image")
    return path


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Application config storing uploads under a temporary directory."""
    return AppConfig(
        storage=StorageConfig(upload_dir=str(tmp_path / "uploads"), retention="keep")
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
