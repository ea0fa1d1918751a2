# ============================================================================
# FILE: habithub/core/guard.py
# ============================================================================
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from habithub.core.errors import AppError, ConflictError, TransactionError
from habithub.core.transaction import TransactionalMutationExecutor
import logging

logger = logging.getLogger(__name__)

class GuardOutcome(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"

class UniquenessGuard:
    """
    Check-then-insert for "at most one row per key" relationships.

    The existence check lets callers tell a duplicate apart from a failed
    write. Two writers can still pass the check together, so the table must
    carry a unique constraint on the key; the loser's IntegrityError is
    reported as ConflictError.
    """

    def __init__(self, model, key_fields: Sequence[str], executor: Optional[TransactionalMutationExecutor] = None):
        self.model = model
        self.key_fields = tuple(key_fields)
        self._executor = executor or TransactionalMutationExecutor()

    def _find_existing(self, session: Session, key: Dict[str, Any]):
        stmt = select(self.model).filter_by(**key).limit(1)
        return session.execute(stmt).scalars().first()

    def try_create(
        self,
        key: Dict[str, Any],
        extra: Optional[Dict[str, Any]] = None,
        precheck: Optional[Callable[[Session], None]] = None,
    ) -> GuardOutcome:
        missing = [f for f in self.key_fields if f not in key]
        if missing:
            raise ValueError(f"Missing key fields: {missing}")
        key = {f: key[f] for f in self.key_fields}

        def check_then_insert(session: Session) -> GuardOutcome:
            if precheck is not None:
                precheck(session)
            if self._find_existing(session, key) is not None:
                return GuardOutcome.ALREADY_EXISTS
            session.add(self.model(**key, **(extra or {})))
            session.flush()
            return GuardOutcome.CREATED

        name = self.model.__tablename__
        result = self._executor.run([check_then_insert], label=f"{name} insert")
        if result.committed:
            outcome = result.results[0]
            logger.info(f"{name} {key}: {outcome.value}")
            return outcome

        cause = result.cause
        if isinstance(cause, IntegrityError):
            logger.warning(f"{name} {key}: unique constraint hit by a concurrent insert")
            raise ConflictError(f"{name} already exists") from cause
        if isinstance(cause, AppError):
            raise cause
        logger.error(f"{name} {key}: insert failed: {cause}")
        raise TransactionError() from cause
