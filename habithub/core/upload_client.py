# ============================================================================
# FILE: habithub/core/upload_client.py
# ============================================================================
import httpx
import posixpath
from typing import Optional
from urllib.parse import quote, urlparse
from habithub.config import Settings
from habithub.core.errors import RemoteSideEffectError
import logging

logger = logging.getLogger(__name__)

def storage_key(reference: str, public_prefix: str = "") -> str:
    """Bare filename of a stored artifact, whether given as a key, a path or a public URL"""
    ref = (reference or "").strip()
    if public_prefix and ref.startswith(public_prefix):
        ref = ref[len(public_prefix):]
    if "://" in ref:
        ref = urlparse(ref).path
    return posixpath.basename(ref)

class UploadClient:
    """Client for the upload service's delete endpoint"""

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadClient":
        return cls(settings.UPLOAD_SERVER, timeout=settings.UPLOAD_TIMEOUT_SECONDS)

    async def delete_file(self, filename: str, token: str) -> None:
        """
        Ask the upload service to delete a file on behalf of the token's user.
        Timeouts, transport errors and non-2xx answers raise RemoteSideEffectError.
        """
        url = f"{self.base_url}/delete/{quote(filename)}"
        headers = {"Authorization": f"Bearer {token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.delete(url, headers=headers)
        except httpx.TimeoutException as e:
            raise RemoteSideEffectError(f"timeout after {self.timeout}s deleting {filename}") from e
        except httpx.HTTPError as e:
            raise RemoteSideEffectError(f"transport error deleting {filename}: {e}") from e

        if response.is_success:
            logger.info(f"Remote file deleted: {filename}")
            return
        raise RemoteSideEffectError(f"upload service answered {response.status_code} deleting {filename}")

async def delete_files_best_effort(client: UploadClient, filenames, token: str, context: str) -> int:
    """
    Delete already-dereferenced files, logging instead of raising on failure.
    Returns how many deletions failed; those files are orphans for the reconciliation sweep.
    """
    failed = 0
    for filename in filenames:
        try:
            await client.delete_file(filename, token)
        except RemoteSideEffectError as e:
            failed += 1
            logger.warning(f"Orphaned upload after {context}: key={filename} reason={e.message}")
        except Exception as e:
            failed += 1
            logger.warning(f"Orphaned upload after {context}: key={filename} reason={e!r}")
    return failed
