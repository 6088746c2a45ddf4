"""Tesseract OCR engine wrapper.

Runs recognition over an image file with a fixed page segmentation
mode and OCR engine mode, and reports progress to an optional observer.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytesseract
from pytesseract import TesseractError, TesseractNotFoundError
from PIL import Image, UnidentifiedImageError

from quickhelp_ocr.exceptions import RecognitionError
from quickhelp_ocr.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecognitionResult:
    """Text recognized in a single image."""

    text: str
    language: str


@dataclass(frozen=True)
class ProgressEvent:
    """Incremental progress reported during recognition."""

    status: str
    progress: float


ProgressObserver = Callable[[ProgressEvent], None]


def log_progress(event: ProgressEvent) -> None:
    """Default progress observer: log the event at DEBUG level."""
    logger.debug("OCR progress: %s (%.0f%%)", event.status, event.progress * 100)


class TesseractEngine:
    """Wrapper around Tesseract OCR for identity-card text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
        psm: Tesseract page segmentation mode.
        oem: Tesseract OCR engine mode.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        psm: int = 6,
        oem: int = 3,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.psm = psm
        self.oem = oem

    @property
    def config(self) -> str:
        """Tesseract command-line configuration string."""
        return f"--psm {self.psm} --oem {self.oem}"

    def recognize(
        self,
        image_path: Path | str,
        lang: str | None = None,
        progress: ProgressObserver | None = None,
    ) -> RecognitionResult:
        """Recognize the text in an image file.

        Args:
            image_path: Path to the image to recognize.
            lang: OCR language code. Defaults to the engine default.
            progress: Optional callback receiving :class:`ProgressEvent`
                updates. Defaults to logging them.

        Returns:
            RecognitionResult holding the recognized text, which may be empty.

        Raises:
            RecognitionError: If the image cannot be decoded or Tesseract fails.
        """
        lang = lang or self.default_lang
        notify = progress or log_progress

        notify(ProgressEvent("loading image", 0.0))
        try:
            with Image.open(image_path) as pil_image:
                pil_image.load()
                notify(ProgressEvent("recognizing text", 0.5))
                text = pytesseract.image_to_string(
                    pil_image, lang=lang, config=self.config
                )
        except (TesseractError, TesseractNotFoundError) as exc:
            logger.error("OCR error: %s", exc)
            raise RecognitionError(f"Tesseract failed on {image_path}") from exc
        except (OSError, UnidentifiedImageError) as exc:
            logger.error("OCR error: cannot decode %s: %s", image_path, exc)
            raise RecognitionError(f"Cannot decode image: {image_path}") from exc

        notify(ProgressEvent("recognized text", 1.0))
        logger.info("OCR extracted %d characters from %s", len(text), image_path)
        return RecognitionResult(text=text, language=lang)
