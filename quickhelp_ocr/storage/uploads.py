"""Flat on-disk storage for uploaded identity-card images.

Files are named ``<millisecond-timestamp><original-extension>`` and
kept according to the configured retention policy.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from quickhelp_ocr.exceptions import StorageError
from quickhelp_ocr.utils.config import StorageConfig
from quickhelp_ocr.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file persisted in the uploads directory."""

    original_filename: str
    stored_filename: str
    path: Path
    content_type: str | None


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_filename(original_filename: str, timestamp_ms: int) -> str:
    """Build the storage name ``<timestamp_ms><original extension>``.

    Args:
        original_filename: Name of the file as uploaded by the client.
        timestamp_ms: Milliseconds since the epoch.

    Returns:
        Storage filename, e.g. ``1700000000000.jpg``.
    """
    return f"{timestamp_ms}{Path(original_filename).suffix}"


class UploadStore:
    """Persists uploads and applies the retention policy.

    Args:
        config: Storage configuration.
        clock: Millisecond clock, replaceable in tests.
    """

    def __init__(
        self,
        config: StorageConfig,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.config = config
        self.upload_dir = Path(config.upload_dir)
        self._clock = clock

    def ensure_dir(self) -> Path:
        """Create the uploads directory if needed and return it."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    def save(
        self,
        content: bytes,
        original_filename: str,
        content_type: str | None = None,
    ) -> UploadedFile:
        """Write ``content`` to the uploads directory under a generated name.

        Args:
            content: Raw file bytes.
            original_filename: Name of the file as uploaded by the client.
            content_type: MIME type reported by the client.

        Returns:
            Description of the stored file.

        Raises:
            StorageError: If the file cannot be written.
        """
        if self.config.retention == "ttl":
            self.sweep_expired()

        stored_filename = generate_filename(original_filename, self._clock())
        path = self.ensure_dir() / stored_filename
        try:
            path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Cannot store upload at {path}") from exc

        logger.info("Stored upload %s as %s", original_filename, stored_filename)
        return UploadedFile(
            original_filename=original_filename,
            stored_filename=stored_filename,
            path=path,
            content_type=content_type,
        )

    def release(self, uploaded: UploadedFile, *derived: Path | None) -> None:
        """Apply the end-of-request retention policy to ``uploaded``.

        Args:
            uploaded: The stored upload.
            derived: Files produced from the upload, such as its
                preprocessed copy, that share its lifetime.
        """
        if self.config.retention != "delete_after_response":
            return
        for path in (uploaded.path, *derived):
            if path is not None:
                path.unlink(missing_ok=True)
        logger.debug("Deleted upload %s after response", uploaded.stored_filename)

    def sweep_expired(self, now: float | None = None) -> int:
        """Delete uploads older than the configured TTL.

        Args:
            now: Current time in seconds since the epoch. Defaults to now.

        Returns:
            Number of files deleted.
        """
        if not self.upload_dir.is_dir():
            return 0

        cutoff = (time.time() if now is None else now) - self.config.ttl_seconds
        removed = 0
        for path in self.upload_dir.iterdir():
            if path.is_file() and path.stat().st_mtime < cutoff:
                path.unlink(missing_ok=True)
                removed += 1

        if removed:
            logger.info("Swept %d expired uploads from %s", removed, self.upload_dir)
        return removed
