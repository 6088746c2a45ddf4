"""National identity card (CNIC) number extraction from OCR text.

CNIC numbers are printed as ``DDDDD-DDDDDDD-D``. Strict extraction
only accepts that exact shape; lenient extraction also recovers numbers
whose dashes were dropped by OCR and normalizes them.
"""

import re
from dataclasses import dataclass

from quickhelp_ocr.utils.logger import get_logger

logger = get_logger(__name__)

CNIC_PATTERN = re.compile(r"\d{5}-\d{7}-\d")
_LENIENT_PATTERN = re.compile(r"\b(\d{5}-?\d{7}-?\d)\b")
_DIGIT_RUN_PATTERN = re.compile(r"\d{13,}")
_GROUPS_PATTERN = re.compile(r"(\d{5})(\d{7})(\d)")


@dataclass(frozen=True)
class ExtractedField:
    """A field value pulled out of OCR text."""

    field_name: str
    value: str
    start_pos: int
    end_pos: int
    extraction_method: str


def format_cnic(digits: str) -> str:
    """Insert CNIC dashes after the 5th and 12th digit of ``digits``.

    Separators are dropped first. Digits past the 13th are kept after
    the last dash, so a misread long run stays visible to the caller.
    """
    return _GROUPS_PATTERN.sub(r"\1-\2-\3", re.sub(r"\D", "", digits), count=1)


def _field(match: re.Match[str], value: str, method: str) -> ExtractedField:
    return ExtractedField(
        field_name="cnic",
        value=value,
        start_pos=match.start(),
        end_pos=match.end(),
        extraction_method=method,
    )


def _leftmost(*matches: re.Match[str] | None) -> re.Match[str] | None:
    found = [m for m in matches if m is not None]
    return min(found, key=lambda m: m.start()) if found else None


def extract_cnic(text: str, lenient: bool = False) -> ExtractedField | None:
    """Find the first CNIC number in ``text``.

    Args:
        text: OCR text to search.
        lenient: Also accept numbers with missing dashes, falling back to
            the first run of 13 or more digits.

    Returns:
        The leftmost match, or ``None`` if the text holds no CNIC number.
    """
    strict = CNIC_PATTERN.search(text)
    match = _leftmost(strict, _LENIENT_PATTERN.search(text)) if lenient else strict

    if match is None and lenient:
        match = _DIGIT_RUN_PATTERN.search(text)

    if match is None:
        logger.info("No CNIC number found in the extracted text")
        return None

    logger.debug("Found CNIC number at %d", match.start())
    value = match.group(0)
    if CNIC_PATTERN.fullmatch(value):
        return _field(match, value, "regex")
    return _field(match, format_cnic(value), "regex_lenient")
