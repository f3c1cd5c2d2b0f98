"""
Photo storage in a local cache directory.

Every upload gets a fresh `uuid4` name (plus the original extension when it
looks like one), so the stored name never depends on the client's filename
and two uploads never share a file.
"""
import logging
import re
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from inventory_service.core.domain.errors import StorageError
from inventory_service.core.ports.blob_store import BlobStorePort

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,8}$")


class FilesystemBlobStore(BlobStorePort):
    def __init__(self, cache_dir):
        self.cache_dir = Path(cache_dir).resolve()

    def ensure_directory(self) -> Path:
        if not self.cache_dir.exists():
            try:
                self.cache_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create cache directory {self.cache_dir}") from e
            logger.info(f"📁 Cache directory created: {self.cache_dir}")
        return self.cache_dir

    @staticmethod
    def generate_name(original_name: Optional[str] = None) -> str:
        suffix = Path(original_name).suffix.lower() if original_name else ""
        if not _EXTENSION_RE.match(suffix):
            suffix = ""
        return f"{uuid.uuid4().hex}{suffix}"

    def _path_for(self, storage_name: str) -> Optional[Path]:
        # Only plain file names directly inside the cache directory
        if not storage_name or storage_name in (".", "..") or Path(storage_name).name != storage_name:
            return None
        return self.cache_dir / storage_name

    def store(self, stream: BinaryIO, original_name: Optional[str] = None) -> str:
        storage_name = self.generate_name(original_name)
        path = self.cache_dir / storage_name
        try:
            # "xb" fails instead of overwriting an existing file
            with open(path, "xb") as target:
                try:
                    shutil.copyfileobj(stream, target)
                except OSError:
                    # Drop the partial file this call created
                    target.close()
                    path.unlink(missing_ok=True)
                    raise
        except OSError as e:
            logger.error(f"Could not store upload '{original_name}' as {path}: {e}")
            raise StorageError(f"Cannot write to cache directory {self.cache_dir}") from e

        logger.info(f"Stored upload '{original_name}' as {storage_name}")
        return storage_name

    def resolve(self, storage_name: str) -> Optional[Path]:
        path = self._path_for(storage_name)
        if path is None or not path.is_file():
            return None
        return path

    def remove(self, storage_name: str) -> None:
        path = self._path_for(storage_name)
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot delete {storage_name} from cache directory") from e
        logger.debug(f"Removed blob {storage_name}")
