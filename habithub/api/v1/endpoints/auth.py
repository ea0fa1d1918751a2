# ============================================================================
# FILE: habithub/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from habithub.api.dependencies import get_token_issuer
from habithub.core.security import TokenIssuer
from habithub.db.session import get_db
from habithub.schemas.user import LoginResponse, UserLogin, UserResponse
from habithub.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Login with username and password
    Returns a token every service accepts
    """
    user = user_service.authenticate_user(db, credentials.username, credentials.password)
    if not user:
        logger.info(f"Failed login for {credentials.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = issuer.issue({"user_id": user.user_id})
    return {
        "message": "Login successful",
        "token": token,
        "user": UserResponse.model_validate(user),
    }
