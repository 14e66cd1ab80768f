import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from coursehub.core.config import settings
from coursehub.core.exceptions import InternalError, ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class IncomingFile:
    filename: Optional[str]
    content_type: Optional[str]
    content: bytes


class LocalStorageService:
    """Stores uploaded objects on disk under ``UPLOAD_DIR``, served at ``UPLOAD_URL_PREFIX``."""

    def __init__(self, base_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR)
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
        self.max_size = settings.MAX_UPLOAD_SIZE
        self.allowed_types = set(settings.ALLOWED_UPLOAD_TYPES)

    def validate(self, filename: Optional[str], content_type: Optional[str], size: int) -> None:
        if not filename:
            raise ValidationError("A file is required.")
        if content_type not in self.allowed_types:
            raise ValidationError(
                "File type not allowed.",
                details={"content_type": content_type, "allowed": sorted(self.allowed_types)},
            )
        if size > self.max_size:
            raise ValidationError(
                "File is too large.",
                details={"size": size, "max_size": self.max_size},
            )

    def save(self, incoming: IncomingFile) -> str:
        """Writes the object and returns its stored path, e.g. ``/uploads/1700000000000-notes.pdf``."""
        filename, content = incoming.filename, incoming.content
        self.validate(filename, incoming.content_type, len(content))

        safe_name = _UNSAFE_CHARS.sub("_", Path(filename).name) or "file"
        stored_name = f"{int(time.time() * 1000)}-{safe_name}"
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            (self.base_dir / stored_name).write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to store upload {stored_name}: {e}")
            raise InternalError("Could not store the uploaded file.")

        logger.info(f"Stored upload {stored_name} ({len(content)} bytes)")
        return f"{self.url_prefix}/{stored_name}"

    def path_for(self, url: str) -> Optional[Path]:
        if not url or not url.startswith(self.url_prefix + "/"):
            return None
        name = Path(url[len(self.url_prefix) + 1:]).name
        return self.base_dir / name if name else None

    def delete(self, url: Optional[str]) -> None:
        """Best effort; a missing or undeletable object is logged and ignored."""
        path = self.path_for(url) if url else None
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
            logger.info(f"Removed stored object {url}")
        except OSError as e:
            logger.warning(f"Could not remove stored object {url}: {e}")

    def delete_after_commit(self, db: Session, urls: Iterable[Optional[str]]) -> None:
        """Removes objects once the session's transaction has committed; a rollback keeps them."""
        pending = [url for url in urls if url]
        if not pending:
            return

        state = {"settled": False}

        def _remove(session):
            if state["settled"]:
                return
            state["settled"] = True
            for url in pending:
                self.delete(url)

        def _keep(session, previous_transaction):
            state["settled"] = True

        event.listen(db, "after_commit", _remove)
        event.listen(db, "after_soft_rollback", _keep)


storage_service = LocalStorageService()
