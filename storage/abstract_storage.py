"""Storage abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO


class AvatarStorage(ABC):
    """Interface for avatar storage backends."""

    @abstractmethod
    def save(self, file_obj: IO[bytes], name: str) -> str:
        """Process and persist an avatar, returning its relative path."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return whether the given relative path exists in storage."""

    @abstractmethod
    def resolve(self, path: str) -> Path:
        """Return the absolute location of a stored relative path."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove a stored file; missing files are ignored."""
