# ============================================================================
# FILE: habithub/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from typing import Optional
from habithub.core.errors import AuthError, ConfigurationError
from habithub.core.security import TokenClaims, TokenIssuer, TokenVerifier
from habithub.core.upload_client import UploadClient
from habithub.services.upload_service import UploadService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise ConfigurationError(f"{name} not configured")
    return value

def get_token_verifier(request: Request) -> TokenVerifier:
    return _from_state(request, "token_verifier")

def get_token_issuer(request: Request) -> TokenIssuer:
    return _from_state(request, "token_issuer")

def get_upload_client(request: Request) -> UploadClient:
    return _from_state(request, "upload_client")

def get_upload_service(request: Request) -> UploadService:
    return _from_state(request, "upload_service")

def get_token_user(
    token: Optional[str] = Depends(oauth2_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Optional[TokenClaims]:
    """
    Claims of the bearer token, or None if there is no valid token
    (allows anonymous access)
    """
    if not token:
        return None
    try:
        return verifier.verify(token)
    except AuthError:
        return None

def require_token_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    token_user: Optional[TokenClaims] = Depends(get_token_user),
) -> TokenClaims:
    """
    Require a valid token (raises 401 otherwise)
    The claims and the raw token are kept on request.state for forwarding
    """
    if token_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.token_user = token_user
    request.state.token = token
    return token_user
