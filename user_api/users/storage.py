"""Image intake: content-type allow-list and on-disk placement of uploads."""
import logging
import shutil
import time
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import BinaryIO, Callable, Iterable

from user_api.core.exceptions import StoreError, UnsupportedMediaTypeError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})

# Leaves room for the timestamp prefix within the usual 255-byte filename limit.
MAX_STEM_BYTES = 200
MAX_SUFFIX_BYTES = 16


def _truncate_utf8(text: str, limit: int) -> str:
    return text.encode()[:limit].decode(errors="ignore")


def normalize_content_type(content_type: str | None) -> str:
    """``"Image/PNG; charset=x"`` -> ``"image/png"``."""
    return (content_type or "").split(";", 1)[0].strip().lower()


class ImageStorage(ABC):
    """Where uploaded images go and which declared types are let in."""

    @abstractmethod
    def accepts(self, content_type: str | None) -> bool:
        ...

    @abstractmethod
    def store(self, stream: BinaryIO, content_type: str | None, original_name: str) -> str:
        """Persist the stream and return its stored path."""
        ...

    @abstractmethod
    def discard(self, path: str) -> None:
        ...


class LocalImageStorage(ImageStorage):
    """Writes uploads to a local directory as ``<epoch-ms>-<original name>``.

    The declared content type is trusted as-is; file contents are not sniffed.
    """

    def __init__(
        self,
        directory: str | Path,
        allowed_types: Iterable[str] = ALLOWED_IMAGE_TYPES,
        clock: Callable[[], float] = time.time,
    ):
        self.directory = Path(directory)
        self.allowed_types = frozenset(allowed_types)
        self._clock = clock

    def accepts(self, content_type: str | None) -> bool:
        return normalize_content_type(content_type) in self.allowed_types

    def filename_for(self, original_name: str) -> str:
        # Drop any directory part a client put in the name, for either path flavour.
        base = PureWindowsPath(PurePosixPath(original_name).name).name
        base = "".join(c for c in base if c.isprintable())
        stem, dot, suffix = base.rpartition(".")
        if dot and stem:
            base = f"{_truncate_utf8(stem, MAX_STEM_BYTES)}.{_truncate_utf8(suffix, MAX_SUFFIX_BYTES)}"
        else:
            base = _truncate_utf8(base, MAX_STEM_BYTES)
        base = base or "upload"
        return f"{int(self._clock() * 1000)}-{base}"

    def store(self, stream: BinaryIO, content_type: str | None, original_name: str) -> str:
        if not self.accepts(content_type):
            raise UnsupportedMediaTypeError(content_type)

        path = self.directory / self.filename_for(original_name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as exc:
            logger.error("Failed to write upload to %s: %s", path, exc)
            raise StoreError("Could not save uploaded image") from exc

        logger.info("Stored upload %s (%s)", path, normalize_content_type(content_type))
        return path.as_posix()

    def discard(self, path: str) -> None:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove upload %s: %s", path, exc)
