# ============================================================================
# FILE: habithub/core/errors.py
# ============================================================================
from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)

class AppError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class AuthError(AppError):
    """Missing, malformed or badly signed token"""
    status_code = 401
    default_message = "Invalid or missing token"

class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"

class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"

class ConflictError(AppError):
    """Uniqueness violation caught by the storage backstop"""
    status_code = 409
    default_message = "Conflict"

class TransactionError(AppError):
    """Store-level failure inside an atomic run; the run was rolled back"""
    status_code = 500
    default_message = "Transaction failed"

class PayloadTooLargeError(AppError):
    status_code = 413
    default_message = "File too large"

class RemoteSideEffectError(AppError):
    """Best-effort call to another service failed; logged, never returned to callers"""
    status_code = 502
    default_message = "Remote side effect failed"

class ConfigurationError(AppError):
    status_code = 500
    default_message = "Server misconfigured"

class CredentialError(AppError):
    """Stored password hash could not be parsed"""
    status_code = 500
    default_message = "Stored credential is malformed"

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
