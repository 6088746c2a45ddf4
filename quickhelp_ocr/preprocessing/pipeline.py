"""Image preprocessing ahead of OCR.

Resizes an identity-card photo to a fixed width and converts it to
grayscale, which speeds up recognition and steadies its accuracy.
"""

from pathlib import Path

import cv2
import numpy as np

from quickhelp_ocr.exceptions import PreprocessingError
from quickhelp_ocr.utils.config import PreprocessingConfig
from quickhelp_ocr.utils.logger import get_logger

logger = get_logger(__name__)


def resize_to_width(image: np.ndarray, target_width: int) -> np.ndarray:
    """Resize an image to ``target_width`` while preserving its aspect ratio.

    Args:
        image: Input image (BGR or grayscale).
        target_width: Width of the output image in pixels.

    Returns:
        Resized image.
    """
    height, width = image.shape[:2]
    if width == target_width:
        return image.copy()

    target_height = max(1, round(height * target_width / width))
    interpolation = cv2.INTER_AREA if target_width < width else cv2.INTER_CUBIC
    return cv2.resize(image, (target_width, target_height), interpolation=interpolation)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert an image to grayscale if it has color channels."""
    if len(image.shape) == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return image


def preprocess_image(
    source: Path | str,
    destination: Path | str,
    target_width: int = 800,
    grayscale: bool = True,
) -> None:
    """Resize and grayscale ``source``, writing the result to ``destination``.

    Args:
        source: Path of a decodable raster image.
        destination: Path to write the preprocessed image to. The file
            extension selects the output format.
        target_width: Width of the output image in pixels.
        grayscale: Whether to drop color channels.

    Raises:
        PreprocessingError: If the source cannot be decoded or the
            destination cannot be written.
    """
    image = cv2.imread(str(source), cv2.IMREAD_COLOR)
    if image is None:
        logger.error("Error preprocessing the image: cannot read %s", source)
        raise PreprocessingError(f"Cannot read image: {source}")

    result = resize_to_width(image, target_width)
    if grayscale:
        result = to_grayscale(result)

    try:
        written = cv2.imwrite(str(destination), result)
    except cv2.error as exc:
        logger.error("Error preprocessing the image: %s", exc)
        raise PreprocessingError(f"Cannot write image: {destination}") from exc

    if not written:
        logger.error("Error preprocessing the image: cannot write %s", destination)
        raise PreprocessingError(f"Cannot write image: {destination}")

    logger.info("Preprocessed image saved to %s", destination)


class ImagePreprocessor:
    """Config-driven wrapper around :func:`preprocess_image`.

    Args:
        config: Preprocessing configuration.
    """

    def __init__(self, config: PreprocessingConfig) -> None:
        self.config = config

    @staticmethod
    def default_destination(source: Path) -> Path:
        """Return ``<stem>_preprocessed.png`` beside ``source``."""
        return source.with_name(f"{source.stem}_preprocessed.png")

    def process(self, source: Path, destination: Path | None = None) -> Path:
        """Preprocess ``source`` and return the path of the written image.

        Args:
            source: Path of the image to preprocess.
            destination: Output path. Defaults to :meth:`default_destination`.

        Returns:
            Path of the preprocessed image.
        """
        source = Path(source)
        if destination is None:
            destination = self.default_destination(source)
        preprocess_image(
            source,
            destination,
            target_width=self.config.target_width,
            grayscale=self.config.grayscale,
        )
        return destination
