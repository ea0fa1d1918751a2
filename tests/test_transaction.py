from sqlalchemy import select

from habithub.core.transaction import RunStatus, TransactionalMutationExecutor
from habithub.db.models import DailyMessage, ReflectionPrompt

def _add_prompt(text):
    def step(session):
        session.add(ReflectionPrompt(prompt_text=text, type="test"))
        session.flush()
        return text
    return step

def _count_prompts(db, text):
    return len(db.execute(select(ReflectionPrompt).where(ReflectionPrompt.prompt_text == text)).scalars().all())

def test_all_steps_commit_together(db):
    result = TransactionalMutationExecutor().run([_add_prompt("one"), _add_prompt("two")])
    assert result.status == RunStatus.COMMITTED
    assert result.committed
    assert result.results == ["one", "two"]
    assert _count_prompts(db, "one") == 1
    assert _count_prompts(db, "two") == 1

def test_failing_step_rolls_back_earlier_writes(db):
    def boom(session):
        raise RuntimeError("store went away")

    result = TransactionalMutationExecutor().run([_add_prompt("kept?"), boom, _add_prompt("never")])
    assert result.status == RunStatus.ROLLED_BACK
    assert isinstance(result.cause, RuntimeError)
    assert result.results == ["kept?"]
    assert _count_prompts(db, "kept?") == 0
    assert _count_prompts(db, "never") == 0

def test_constraint_violation_rolls_back(db):
    def bad_message(session):
        session.add(DailyMessage(message_text=None))
        session.flush()

    result = TransactionalMutationExecutor().run([_add_prompt("before violation"), bad_message])
    assert not result.committed
    assert _count_prompts(db, "before violation") == 0

def test_every_run_closes_its_session(temp_db):
    opened = []

    class RecordingFactory:
        def __call__(self):
            from habithub.db.session import get_sessionmaker
            session = get_sessionmaker()()
            opened.append(session)
            return session

    executor = TransactionalMutationExecutor(session_factory=RecordingFactory())
    executor.run([_add_prompt("a")])
    executor.run([lambda s: 1 / 0])

    assert len(opened) == 2
    for session in opened:
        assert not session.in_transaction()

def test_empty_run_commits(temp_db):
    result = TransactionalMutationExecutor().run([])
    assert result.committed
    assert result.results == []
