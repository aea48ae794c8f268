import time
from pathlib import Path
from typing import BinaryIO

from nodues.core.config import settings
from nodues.core.exceptions import FileTooLarge
from nodues.core.logging_config import get_logger

logger = get_logger(__name__)

_CHUNK_SIZE = 1024 * 1024


class FileSink:
    """
    Stores uploaded bytes on local disk under ``root``.

    Locations handed back by :meth:`save` are file names relative to ``root``,
    so stored rows stay valid whatever directory the service runs from.
    """

    def __init__(self, root: str | Path, max_bytes: int):
        self.root = Path(root)
        self.max_bytes = max_bytes

    def path(self, location: str) -> Path:
        return self.root / location

    def _reserve(self, original_name: str) -> tuple[Path, BinaryIO]:
        # "xb" fails if the name exists, so two uploads can never share a file
        suffix = Path(original_name).suffix
        stamp = int(time.time() * 1000)
        while True:
            target = self.root / f"{stamp}{suffix}"
            try:
                return target, open(target, "xb")
            except FileExistsError:
                stamp += 1

    def save(self, source: BinaryIO, original_name: str) -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        target, out = self._reserve(original_name)
        written = 0
        try:
            with out:
                while chunk := source.read(_CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise FileTooLarge(self.max_bytes)
                    out.write(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise
        logger.debug("Stored %s (%d bytes) at %s", original_name, written, target)
        return target.name

    def delete(self, location: str) -> None:
        path = self.path(location)
        if not path.exists():
            logger.warning("Stored file %s already gone", path)
            return
        path.unlink()
        logger.debug("Removed stored file %s", path)


def get_file_sink() -> FileSink:
    return FileSink(settings.upload_dir, settings.max_upload_bytes)
