"""Command-line workflow for offline OCR of a local identity-card image.

With no arguments, preprocesses ``./nic.jpg`` into ``./nic_preprocessed.png``
and prints the recognized text.
"""

import argparse
import sys
from pathlib import Path

from quickhelp_ocr.exceptions import PreprocessingError, RecognitionError
from quickhelp_ocr.extraction.cnic_extractor import extract_cnic
from quickhelp_ocr.ocr.pipeline import OCRPipeline
from quickhelp_ocr.utils.config import load_config
from quickhelp_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_INPUT = Path("./nic.jpg")
DEFAULT_OUTPUT = Path("./nic_preprocessed.png")


def run_workflow(
    input_path: Path = DEFAULT_INPUT,
    output_path: Path = DEFAULT_OUTPUT,
    lang: str | None = None,
    show_cnic: bool = False,
) -> int:
    """Preprocess an image, recognize it, and print the extracted text.

    Args:
        input_path: Source image path.
        output_path: Where to write the preprocessed image.
        lang: OCR language code. Defaults to the configured language.
        show_cnic: Whether to also print the CNIC number found in the text.

    Returns:
        Process exit status: 0 on success, 1 on failure.
    """
    config = load_config()
    pipeline = OCRPipeline(config)

    try:
        result = pipeline.extract_text(
            input_path,
            preprocess=config.preprocessing.enabled_for_cli,
            preprocessed_path=output_path,
            lang=lang,
        )
    except PreprocessingError as exc:
        logger.error("Preprocessing failed, skipping OCR: %s", exc)
        return 1
    except RecognitionError as exc:
        logger.error("OCR Process Failed: %s", exc)
        return 1

    print(f"Extracted Text: {result.text}")

    if show_cnic:
        cnic = extract_cnic(result.text, lenient=True)
        print(f"CNIC: {cnic.value if cnic else 'not found'}")

    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the OCR workflow.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Preprocess and OCR a local identity-card image",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=DEFAULT_INPUT,
        help=f"Input image (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Preprocessed image path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument("--lang", help="OCR language code (default: from config)")
    parser.add_argument(
        "--cnic", action="store_true", help="Also print the CNIC number"
    )

    args = parser.parse_args(argv)

    setup_logging()
    sys.exit(run_workflow(args.input, args.output, args.lang, args.cnic))


if __name__ == "__main__":
    main()
