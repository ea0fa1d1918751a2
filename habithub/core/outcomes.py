# ============================================================================
# FILE: habithub/core/outcomes.py
# ============================================================================
from enum import Enum

class DeleteOutcome(str, Enum):
    """Caller-visible result of a delete on the local store"""
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
