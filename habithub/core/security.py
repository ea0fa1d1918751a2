# ============================================================================
# FILE: habithub/core/security.py
# ============================================================================
"""
Password hashing and the shared identity token contract.

Every service verifies tokens on its own, so the contract below (claim names,
signing algorithm, version claim) must stay identical across the auth, media
and upload apps. Bump TOKEN_CONTRACT_VERSION on any change to it.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from habithub.core.errors import AuthError, ConfigurationError, CredentialError
import logging

logger = logging.getLogger(__name__)

TOKEN_CONTRACT_VERSION = 1
RESERVED_CLAIMS = ("ver", "exp")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# ----------------------------------------------------------------------------
# Credentials
# ----------------------------------------------------------------------------

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Compare a presented password with the stored salted hash.
    A wrong password is False; an unusable stored hash raises CredentialError.
    """
    if not hashed_password:
        raise CredentialError("Stored password hash is empty")
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Unreadable password hash: {e}")
        raise CredentialError() from e

# ----------------------------------------------------------------------------
# Tokens
# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration, built once at startup and injected where needed"""
    secret: str
    algorithm: str = "HS256"
    expire_minutes: Optional[int] = None

    def __post_init__(self):
        if not self.secret:
            raise ConfigurationError("JWT_SECRET not found")

    @classmethod
    def from_settings(cls, settings) -> "TokenConfig":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

@dataclass(frozen=True)
class TokenClaims:
    """Verified token content; user_id is the authenticated identity"""
    user_id: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {"user_id": self.user_id, **self.extra}

class TokenIssuer:
    def __init__(self, config: TokenConfig):
        self._config = config

    def issue(self, claims: Dict[str, Any]) -> str:
        """Sign a token carrying at least the subject's user_id"""
        user_id = claims.get("user_id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise ValueError("Token claims require an integer user_id")
        to_encode = {k: v for k, v in claims.items() if k not in RESERVED_CLAIMS}
        to_encode["ver"] = TOKEN_CONTRACT_VERSION
        if self._config.expire_minutes:
            expire = datetime.now(timezone.utc) + timedelta(minutes=self._config.expire_minutes)
            to_encode["exp"] = expire
        return jwt.encode(to_encode, self._config.secret, algorithm=self._config.algorithm)

class TokenVerifier:
    def __init__(self, config: TokenConfig):
        self._config = config

    def verify(self, token: Optional[str]) -> TokenClaims:
        """Check the signature (and exp when present); raise AuthError otherwise"""
        if not token:
            raise AuthError()
        try:
            payload = jwt.decode(token, self._config.secret, algorithms=[self._config.algorithm])
        except JWTError as e:
            logger.info(f"Token rejected: {e}")
            raise AuthError() from e

        if payload.get("ver") != TOKEN_CONTRACT_VERSION:
            logger.info(f"Token rejected: contract version {payload.get('ver')!r}")
            raise AuthError()
        user_id = payload.get("user_id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthError()

        extra = {k: v for k, v in payload.items() if k not in RESERVED_CLAIMS and k != "user_id"}
        return TokenClaims(user_id=user_id, extra=extra)
