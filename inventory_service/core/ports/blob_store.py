from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional


class BlobStorePort(ABC):
    @abstractmethod
    def store(self, stream: BinaryIO, original_name: Optional[str] = None) -> str:
        """Persist the stream under a new unique name and return that name."""

    @abstractmethod
    def resolve(self, storage_name: str) -> Optional[Path]:
        """Absolute path of the blob, or None when it does not exist."""

    @abstractmethod
    def remove(self, storage_name: str) -> None:
        """Delete the blob. A missing blob is not an error."""
