# ============================================================================
# FILE: habithub/core/transaction.py
# ============================================================================
"""
Atomic multi-step writes.

A run owns one session from start to finish: every step gets the same
session, the run commits once after the last step, and any exception from
a step rolls back everything written so far. The session is closed as soon
as the run ends, so no transaction outlives the operation that opened it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence
from sqlalchemy.orm import Session, sessionmaker
from habithub.db.session import get_sessionmaker
import logging

logger = logging.getLogger(__name__)

Step = Callable[[Session], Any]

class RunStatus(str, Enum):
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"

@dataclass
class TransactionResult:
    status: RunStatus
    results: List[Any] = field(default_factory=list)
    cause: Optional[BaseException] = None

    @property
    def committed(self) -> bool:
        return self.status == RunStatus.COMMITTED

class TransactionalMutationExecutor:
    """Runs an ordered sequence of writes as one unit"""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def _new_session(self) -> Session:
        # Resolved per run so a reconfigured engine is picked up
        factory = self._session_factory or get_sessionmaker()
        return factory()

    def run(self, steps: Sequence[Step], label: str = "transaction") -> TransactionResult:
        session = self._new_session()
        results = []
        try:
            with session.begin():
                for step in steps:
                    results.append(step(session))
        except Exception as e:
            # session.begin() already rolled back on the way out
            logger.info(f"{label} rolled back after {len(results)} step(s): {e!r}")
            return TransactionResult(status=RunStatus.ROLLED_BACK, results=results, cause=e)
        finally:
            session.close()

        logger.debug(f"{label} committed {len(results)} step(s)")
        return TransactionResult(status=RunStatus.COMMITTED, results=results)

def rowcount(result) -> int:
    """Rows affected by an executed DML statement"""
    return result.rowcount if result.rowcount is not None else 0
