"""Exception hierarchy for the OCR service."""


class QuickHelpOCRError(Exception):
    """Base class for all errors raised by the OCR service."""


class PreprocessingError(QuickHelpOCRError):
    """The source image could not be read or the result could not be written."""


class RecognitionError(QuickHelpOCRError):
    """The OCR engine failed to recognize text in an image."""


class StorageError(QuickHelpOCRError):
    """An uploaded file could not be persisted."""


class FaceComparisonError(QuickHelpOCRError):
    """A face could not be decoded, detected, or described."""
