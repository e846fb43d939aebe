"""Local filesystem avatar storage."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import IO

from PIL import Image, ImageOps, UnidentifiedImageError
from werkzeug.utils import secure_filename

from config import Config

from .abstract_storage import AvatarStorage

AVATAR_SUBDIR = "avatars"
_EXTENSIONS = {"JPEG": "jpg", "PNG": "png", "GIF": "gif", "WEBP": "webp"}


class LocalAvatarStorage(AvatarStorage):
    """Resize avatars and keep them under ``<public_dir>/avatars``."""

    def __init__(self, public_dir: str | None = None, size: tuple[int, int] | None = None):
        self.public_directory = Path(public_dir or Config.PUBLIC_DIR)
        self.base_directory = self.public_directory / AVATAR_SUBDIR
        self.size = tuple(size or Config.AVATAR_SIZE)
        os.makedirs(self.base_directory, exist_ok=True)

    def save(self, file_obj: IO[bytes], name: str) -> str:
        """Crop-resize the image to ``size`` and return ``avatars/<file>``."""

        stream = getattr(file_obj, "stream", file_obj)
        try:
            with Image.open(stream) as image:
                image_format = image.format if image.format in _EXTENSIONS else "PNG"
                fitted = ImageOps.fit(image, self.size)
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError("Uploaded file is not a supported image.") from exc

        if image_format == "JPEG" and fitted.mode not in ("RGB", "L"):
            fitted = fitted.convert("RGB")

        safe_name = secure_filename(f"{name}.{_EXTENSIONS[image_format]}")
        if not safe_name:
            raise ValueError("Filename must contain at least one valid character.")

        destination = self.base_directory / safe_name
        fitted.save(destination, format=image_format)
        return str(PurePosixPath(AVATAR_SUBDIR) / safe_name)

    def exists(self, path: str) -> bool:
        """Return True if the relative path exists under the public directory."""

        try:
            return self.resolve(path).is_file()
        except ValueError:
            return False

    def resolve(self, path: str) -> Path:
        candidate = (self.public_directory / path).resolve()
        if self.base_directory.resolve() not in candidate.parents:
            raise ValueError("Path escapes the avatar directory.")
        return candidate

    def delete(self, path: str) -> None:
        """Remove a previously stored avatar if it is still there."""

        try:
            target = self.resolve(path)
        except ValueError:
            return
        target.unlink(missing_ok=True)
