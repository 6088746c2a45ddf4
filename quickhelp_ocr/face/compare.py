"""Face comparison between two photos using OpenCV's YuNet and SFace models.

Detects the most confident face in each image, computes an SFace
descriptor for it, and compares the descriptors by Euclidean distance.
"""

import cv2
import numpy as np

from quickhelp_ocr.exceptions import FaceComparisonError
from quickhelp_ocr.utils.config import FaceConfig
from quickhelp_ocr.utils.logger import get_logger

logger = get_logger(__name__)


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two descriptors after L2 normalization."""
    a = a.ravel() / (np.linalg.norm(a) or 1.0)
    b = b.ravel() / (np.linalg.norm(b) or 1.0)
    return float(np.linalg.norm(a - b))


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes into a BGR array.

    Raises:
        FaceComparisonError: If the bytes are not a decodable image.
    """
    image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise FaceComparisonError("Cannot decode image")
    return image


class FaceComparator:
    """Compares faces in two images.

    Models are loaded on first use.

    Args:
        config: Face comparison configuration.
    """

    def __init__(self, config: FaceConfig) -> None:
        self.config = config
        self._detector = None
        self._recognizer = None

    def load_models(self) -> None:
        """Load the face detection and recognition models."""
        if self._detector is not None:
            return
        try:
            self._detector = cv2.FaceDetectorYN.create(
                self.config.detector_model,
                "",
                (320, 320),
                self.config.score_threshold,
            )
            self._recognizer = cv2.FaceRecognizerSF.create(
                self.config.recognizer_model, ""
            )
        except cv2.error as exc:
            raise FaceComparisonError(f"Cannot load face models: {exc}") from exc
        logger.info("Loaded face models")

    def compute_descriptor(self, image: np.ndarray) -> np.ndarray:
        """Compute the descriptor of the most confident face in ``image``.

        Raises:
            FaceComparisonError: If no face is detected.
        """
        self.load_models()
        height, width = image.shape[:2]
        self._detector.setInputSize((width, height))
        _, faces = self._detector.detect(image)
        if faces is None or len(faces) == 0:
            raise FaceComparisonError("No face detected")

        face = max(faces, key=lambda f: f[-1])
        aligned = self._recognizer.alignCrop(image, face)
        return self._recognizer.feature(aligned)

    def compare_faces(self, image1: bytes, image2: bytes) -> bool:
        """Return whether two encoded images show the same person.

        Args:
            image1: Encoded bytes of the first image.
            image2: Encoded bytes of the second image.

        Returns:
            ``True`` if the descriptor distance is below the threshold.
        """
        descriptor1 = self.compute_descriptor(decode_image(image1))
        descriptor2 = self.compute_descriptor(decode_image(image2))

        distance = euclidean_distance(descriptor1, descriptor2)
        logger.debug("Face descriptor distance: %.3f", distance)
        return distance < self.config.distance_threshold
