"""OCR pipeline shared by the HTTP endpoint and the CLI.

Combines optional preprocessing, Tesseract recognition, and CNIC
extraction behind one interface.
"""

from pathlib import Path

from quickhelp_ocr.extraction.cnic_extractor import ExtractedField, extract_cnic
from quickhelp_ocr.preprocessing.pipeline import ImagePreprocessor
from quickhelp_ocr.utils.config import AppConfig
from quickhelp_ocr.utils.logger import get_logger

from .tesseract_engine import ProgressObserver, RecognitionResult, TesseractEngine

logger = get_logger(__name__)


class OCRPipeline:
    """Preprocess-then-recognize pipeline for identity-card images.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.preprocessor = ImagePreprocessor(config.preprocessing)
        self.engine = TesseractEngine(
            tesseract_cmd=config.ocr.tesseract_cmd,
            default_lang=config.ocr.default_lang,
            psm=config.ocr.psm,
            oem=config.ocr.oem,
        )

    def extract_text(
        self,
        image_path: Path,
        preprocess: bool = False,
        preprocessed_path: Path | None = None,
        lang: str | None = None,
        progress: ProgressObserver | None = None,
    ) -> RecognitionResult:
        """Recognize the text in an image, optionally preprocessing it first.

        Args:
            image_path: Path to the source image.
            preprocess: Whether to resize and grayscale before recognition.
            preprocessed_path: Where to write the preprocessed image.
            lang: OCR language code.
            progress: Optional recognition progress observer.

        Returns:
            Recognition result for the (possibly preprocessed) image.

        Raises:
            PreprocessingError: If preprocessing was requested and failed.
            RecognitionError: If recognition failed.
        """
        target = Path(image_path)
        if preprocess:
            target = self.preprocessor.process(target, preprocessed_path)

        logger.info("Running OCR on %s", target)
        return self.engine.recognize(target, lang=lang, progress=progress)

    def extract_cnic(
        self,
        image_path: Path,
        preprocess: bool = False,
        lenient: bool = False,
    ) -> tuple[RecognitionResult, ExtractedField | None]:
        """Recognize an image and pull the CNIC number out of its text.

        Args:
            image_path: Path to the source image.
            preprocess: Whether to resize and grayscale before recognition.
            lenient: Whether to accept CNIC numbers with missing dashes.

        Returns:
            Tuple of (recognition_result, cnic_field_or_none).
        """
        result = self.extract_text(image_path, preprocess=preprocess)
        return result, extract_cnic(result.text, lenient=lenient)
