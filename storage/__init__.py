"""Storage backends."""

from .abstract_storage import AvatarStorage
from .local_storage import LocalAvatarStorage

__all__ = ["AvatarStorage", "LocalAvatarStorage"]
