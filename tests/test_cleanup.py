"""Background expiry sweep scheduling and overlap guard."""
import asyncio
from datetime import timedelta

from sqlalchemy import select

from services.conversation_service.cleanup import ConversationCleanupTask
from services.conversation_service.models import Conversation, utcnow


async def add_conversation(session_factory, session_id, age):
    async with session_factory() as session:
        created = utcnow() - age
        session.add(Conversation(session_id=session_id, status="active", created_at=created, updated_at=created))
        await session.commit()


async def test_run_once_uses_configured_age(session_factory):
    await add_conversation(session_factory, "old", timedelta(days=3))
    await add_conversation(session_factory, "young", timedelta(days=1, hours=12))
    task = ConversationCleanupTask(session_factory, max_age_days=2, interval_seconds=60)

    assert await task.run_once() == 1

    async with session_factory() as session:
        remaining = (await session.execute(select(Conversation.session_id))).scalars().all()
    assert remaining == ["young"]


async def test_overlapping_sweep_is_skipped(session_factory):
    await add_conversation(session_factory, "old", timedelta(days=3))
    task = ConversationCleanupTask(session_factory, max_age_days=1, interval_seconds=60)

    async with task._lock:
        assert await task.run_once() == 0

    assert await task.run_once() == 1


async def test_start_runs_a_sweep_and_stop_cancels(session_factory, monkeypatch):
    await add_conversation(session_factory, "old", timedelta(days=3))
    task = ConversationCleanupTask(session_factory, max_age_days=1, interval_seconds=3600)
    swept = asyncio.Event()
    original = task.run_once

    async def tracked(*args, **kwargs):
        deleted = await original(*args, **kwargs)
        swept.set()
        return deleted

    monkeypatch.setattr(task, "run_once", tracked)
    task.start()
    assert task.running
    await asyncio.wait_for(swept.wait(), timeout=5)

    await task.stop()

    assert not task.running
    async with session_factory() as session:
        assert (await session.execute(select(Conversation.id))).scalars().all() == []


async def test_failed_sweep_keeps_schedule_alive(session_factory, monkeypatch):
    task = ConversationCleanupTask(session_factory, max_age_days=1, interval_seconds=0.01)
    calls = []

    async def flaky(*args, **kwargs):
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("database went away")
        return 0

    monkeypatch.setattr(task, "run_once", flaky)
    task.start()
    for _ in range(50):
        if len(calls) >= 2:
            break
        await asyncio.sleep(0.01)
    await task.stop()

    assert len(calls) >= 2
