import logging
import re
import uuid
from pathlib import Path

from trainingsheets.config import UPLOAD_DIR, UPLOAD_URL_PREFIX
from trainingsheets.errors import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


class LocalFileStorage:
    """Stores uploaded sheet PDFs on disk and hands out their public paths."""

    def __init__(self, root: Path = UPLOAD_DIR, url_prefix: str = UPLOAD_URL_PREFIX):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _owns(self, path: str) -> bool:
        return path.startswith(f"{self.url_prefix}/")

    def _local_path(self, path: str) -> Path:
        # Only the final component is trusted; stored files live flat under root
        return self.root / Path(path).name

    def save(self, filename: str, data: bytes) -> str:
        safe_name = _UNSAFE_CHARS.sub("_", Path(filename).name) or "upload.pdf"
        stored_name = f"{uuid.uuid4().hex}-{safe_name}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / stored_name).write_bytes(data)
        except OSError as err:
            raise StorageError(f"Failed to store {filename}") from err
        logger.debug("Stored %s as %s", filename, stored_name)
        return f"{self.url_prefix}/{stored_name}"

    def delete(self, path: str) -> None:
        """Release a stored file. Paths this storage did not hand out are ignored."""
        if not self._owns(path):
            logger.debug("Not deleting %s: outside %s", path, self.url_prefix)
            return
        try:
            self._local_path(path).unlink(missing_ok=True)
        except OSError as err:
            raise StorageError(f"Failed to delete {path}") from err

    def exists(self, path: str) -> bool:
        return self._owns(path) and self._local_path(path).is_file()


def get_storage() -> LocalFileStorage:
    return LocalFileStorage()
