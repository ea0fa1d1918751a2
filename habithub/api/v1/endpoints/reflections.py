# ============================================================================
# FILE: habithub/api/v1/endpoints/reflections.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from habithub.api.dependencies import require_token_user
from habithub.core.security import TokenClaims
from habithub.db.session import get_db
from habithub.schemas.common import MessageResponse
from habithub.schemas.reflection import PromptResponse, ReflectionCreate, ReflectionResponse
from habithub.services.reflection_service import reflection_service

router = APIRouter()

@router.get("", response_model=List[ReflectionResponse])
async def list_reflections(db: Session = Depends(get_db)):
    return reflection_service.get_reflections(db)

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_reflection(
    body: ReflectionCreate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    if not reflection_service.create_reflection(db, token_user.user_id, body):
        raise HTTPException(status_code=404, detail="Prompt not found")
    return {"message": "Reflection added"}

@router.get("/prompts", response_model=List[PromptResponse])
async def list_prompts(db: Session = Depends(get_db)):
    return reflection_service.get_prompts(db)

@router.get("/byuser", response_model=List[ReflectionResponse])
async def reflections_by_token_user(
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    return reflection_service.get_reflections_by_user(db, token_user.user_id)
