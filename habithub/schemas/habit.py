# ============================================================================
# FILE: habithub/schemas/habit.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date as DateType

class HabitCreate(BaseModel):
    habit_name: str = Field(..., min_length=1, max_length=100)
    habit_description: str = Field(..., min_length=1)
    habit_category: str = Field(..., min_length=1, max_length=50)

class HabitSelect(BaseModel):
    habit_id: int

class HabitResponse(BaseModel):
    habit_id: int
    habit_name: str
    habit_description: str
    habit_category: str
    is_default: Optional[bool] = None

    class Config:
        from_attributes = True

class HabitMessageResponse(BaseModel):
    message: str
    habit: HabitResponse

class FrequencyUpdate(BaseModel):
    habit_frequency: int = Field(..., ge=1)

class FrequencyResponse(BaseModel):
    message: str
    habit_frequency: int

class HabitDateCreate(BaseModel):
    date: DateType
