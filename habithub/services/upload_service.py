# ============================================================================
# FILE: habithub/services/upload_service.py
# ============================================================================
"""
Local file storage for the upload app.

Files are stored flat under UPLOAD_DIR with random names. Each file has a
``<filename>.json`` sidecar recording who uploaded it, which is what the
delete endpoint checks ownership against.
"""
import json
import os
import secrets
import shutil
from pathlib import Path
from typing import BinaryIO, Optional
from habithub.core.errors import PayloadTooLargeError
from habithub.core.outcomes import DeleteOutcome
from habithub.schemas.upload import UploadData
import logging

logger = logging.getLogger(__name__)

THUMBNAIL_SUFFIX = "-thumb.png"
SIDECAR_SUFFIX = ".json"

class UploadService:
    def __init__(self, upload_dir: str, max_bytes: Optional[int] = None):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes

    def _path(self, filename: str) -> Optional[Path]:
        # Only bare names inside upload_dir are addressable
        if not filename or filename != os.path.basename(filename) or filename in (".", ".."):
            return None
        return self.upload_dir / filename

    def save(self, stream: BinaryIO, original_name: Optional[str], media_type: Optional[str], user_id: int) -> UploadData:
        """Store an uploaded stream under a fresh random name"""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(original_name or "").suffix.lower()
        filename = f"{secrets.token_hex(16)}{suffix}"
        target = self.upload_dir / filename

        with open(target, "wb") as out:
            shutil.copyfileobj(stream, out)
        filesize = target.stat().st_size
        if self.max_bytes is not None and filesize > self.max_bytes:
            target.unlink()
            logger.warning(f"Upload rejected for user {user_id}: {filesize} bytes")
            raise PayloadTooLargeError()

        sidecar = self.upload_dir / f"{filename}{SIDECAR_SUFFIX}"
        sidecar.write_text(json.dumps({"filename": filename, "user_id": user_id}))
        logger.info(f"File uploaded: {filename} ({filesize} bytes) by user {user_id}")
        return UploadData(
            filename=filename,
            media_type=media_type or "application/octet-stream",
            filesize=filesize,
        )

    def owner_of(self, filename: str) -> Optional[int]:
        path = self._path(filename)
        if path is None:
            return None
        sidecar = path.with_name(f"{filename}{SIDECAR_SUFFIX}")
        try:
            return json.loads(sidecar.read_text()).get("user_id")
        except FileNotFoundError:
            return None
        except ValueError as e:
            logger.error(f"Unreadable sidecar for {filename}: {e}")
            return None

    def delete(self, filename: str, user_id: int) -> DeleteOutcome:
        """Remove a file, its thumbnail and its sidecar; only the uploader may"""
        path = self._path(filename)
        if path is None or not path.exists():
            return DeleteOutcome.NOT_FOUND
        if self.owner_of(filename) != user_id:
            logger.warning(f"User {user_id} may not delete {filename}")
            return DeleteOutcome.FORBIDDEN

        for target in (path, path.with_name(f"{filename}{THUMBNAIL_SUFFIX}"), path.with_name(f"{filename}{SIDECAR_SUFFIX}")):
            try:
                target.unlink()
            except FileNotFoundError:
                pass
        logger.info(f"File deleted: {filename}")
        return DeleteOutcome.DELETED
