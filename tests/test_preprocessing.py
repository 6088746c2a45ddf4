"""Tests for the resize/grayscale image preprocessor."""

from pathlib import Path

import cv2
import numpy as np
import pytest

from quickhelp_ocr.exceptions import PreprocessingError
from quickhelp_ocr.preprocessing.pipeline import (
    ImagePreprocessor,
    preprocess_image,
    resize_to_width,
    to_grayscale,
)
from quickhelp_ocr.utils.config import PreprocessingConfig


class TestResizeToWidth:
    """Tests for aspect-preserving resizing."""

    def test_downscale_preserves_aspect(self) -> None:
        image = np.zeros((1000, 2000, 3), dtype=np.uint8)
        result = resize_to_width(image, 800)
        assert result.shape == (400, 800, 3)

    def test_upscale_preserves_aspect(self, sample_image: np.ndarray) -> None:
        result = resize_to_width(sample_image, 800)
        assert result.shape == (400, 800, 3)

    def test_same_width_returns_copy(self, sample_image: np.ndarray) -> None:
        result = resize_to_width(sample_image, 400)
        np.testing.assert_array_equal(result, sample_image)
        assert result is not sample_image


class TestToGrayscale:
    """Tests for grayscale conversion."""

    def test_color_to_gray(self, sample_image: np.ndarray) -> None:
        assert to_grayscale(sample_image).shape == (200, 400)

    def test_gray_passthrough(self) -> None:
        gray = np.zeros((10, 10), dtype=np.uint8)
        assert to_grayscale(gray) is gray


class TestPreprocessImage:
    """Tests for the file-to-file preprocessing step."""

    def test_writes_resized_grayscale(self, image_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "nic_preprocessed.png"
        preprocess_image(image_file, out)

        assert out.exists()
        written = cv2.imread(str(out), cv2.IMREAD_UNCHANGED)
        assert written.shape == (400, 800)

    def test_keep_color(self, image_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "color.png"
        preprocess_image(image_file, out, target_width=200, grayscale=False)
        written = cv2.imread(str(out), cv2.IMREAD_UNCHANGED)
        assert written.shape == (100, 200, 3)

    def test_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PreprocessingError):
            preprocess_image(tmp_path / "missing.jpg", tmp_path / "out.png")
        assert not (tmp_path / "out.png").exists()

    def test_undecodable_source_raises(self, text_file: Path, tmp_path: Path) -> None:
        with pytest.raises(PreprocessingError):
            preprocess_image(text_file, tmp_path / "out.png")

    def test_unwritable_destination_raises(
        self, image_file: Path, tmp_path: Path
    ) -> None:
        with pytest.raises(PreprocessingError):
            preprocess_image(image_file, tmp_path / "no" / "such" / "dir" / "out.png")


class TestImagePreprocessor:
    """Tests for the config-driven preprocessor."""

    def test_default_destination(self) -> None:
        dest = ImagePreprocessor.default_destination(Path("/tmp/uploads/123.jpg"))
        assert dest == Path("/tmp/uploads/123_preprocessed.png")

    def test_process_uses_config_width(self, image_file: Path) -> None:
        preprocessor = ImagePreprocessor(PreprocessingConfig(target_width=100))
        dest = preprocessor.process(image_file)

        assert dest == image_file.with_name("nic_preprocessed.png")
        assert cv2.imread(str(dest), cv2.IMREAD_UNCHANGED).shape == (50, 100)
