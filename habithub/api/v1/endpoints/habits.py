# ============================================================================
# FILE: habithub/api/v1/endpoints/habits.py
# ============================================================================
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from habithub.api.dependencies import require_token_user
from habithub.core.security import TokenClaims
from habithub.db.session import get_db
from habithub.schemas.common import MessageResponse
from habithub.schemas.habit import (
    FrequencyResponse, FrequencyUpdate, HabitCreate, HabitDateCreate,
    HabitMessageResponse, HabitResponse, HabitSelect,
)
from habithub.services.habit_service import habit_service

router = APIRouter()

@router.get("", response_model=List[HabitResponse])
async def list_habits(db: Session = Depends(get_db)):
    return habit_service.get_habits(db)

@router.get("/created", response_model=List[HabitResponse])
async def list_created_habits(db: Session = Depends(get_db)):
    return habit_service.get_created_habits(db)

@router.get("/created/{habit_id}", response_model=HabitResponse)
async def get_created_habit(habit_id: int, db: Session = Depends(get_db)):
    habit = habit_service.get_created_habit(db, habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit

@router.get("/dates/{habit_id}", response_model=List[date])
async def get_habit_dates(
    habit_id: int,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    return habit_service.get_habit_dates(db, habit_id, token_user.user_id)

@router.post("/dates/{habit_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_habit_date(
    habit_id: int,
    body: HabitDateCreate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    if not habit_service.add_habit_date(db, habit_id, token_user.user_id, body.date):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"message": "Habit date added"}

@router.get("/{habit_id}", response_model=HabitResponse)
async def get_habit(habit_id: int, db: Session = Depends(get_db)):
    habit = habit_service.get_habit(db, habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit

@router.post("", response_model=HabitMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_habit(
    habit_data: HabitCreate,
    token_user: TokenClaims = Depends(require_token_user),
):
    """Create a habit and select it for the token user"""
    habit = habit_service.create_habit(token_user.user_id, habit_data)
    return {"message": "Habit created", "habit": habit}

@router.post("/frequency", response_model=FrequencyResponse)
async def set_frequency(
    body: FrequencyUpdate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    frequency = habit_service.set_frequency(db, token_user.user_id, body.habit_frequency)
    if frequency is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "Habit frequency updated", "habit_frequency": frequency}

@router.put("/habit", response_model=HabitMessageResponse)
async def select_habit(
    body: HabitSelect,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    habit = habit_service.select_habit(db, token_user.user_id, body.habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"message": "Habit selected", "habit": habit}
