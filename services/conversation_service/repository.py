from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Conversation, Message, utcnow


class ConversationRepository:

    @staticmethod
    async def rotate(db: AsyncSession, session_id: str) -> Conversation:
        """Closes the session's active conversation and opens a new one, in one commit."""
        await db.execute(
            update(Conversation)
            .where(Conversation.session_id == session_id, Conversation.status == "active")
            .values(status="closed")
        )
        conversation = Conversation(session_id=session_id, status="active")
        db.add(conversation)
        await db.commit()
        await db.refresh(conversation)
        return conversation

    @staticmethod
    async def get_by_id(db: AsyncSession, conversation_id: int) -> Optional[Conversation]:
        result = await db.execute(select(Conversation).where(Conversation.id == conversation_id))
        return result.scalars().first()

    @staticmethod
    async def get_active_by_session(db: AsyncSession, session_id: str) -> Optional[Conversation]:
        result = await db.execute(
            select(Conversation)
            .where(Conversation.session_id == session_id, Conversation.status == "active")
            .order_by(Conversation.created_at.desc(), Conversation.id.desc())
            .limit(1)
        )
        return result.scalars().first()

    @staticmethod
    async def add_message(db: AsyncSession, conversation_id: int, sender_type: str, text: str) -> Message:
        """Stores the message and touches the parent's updated_at, in one commit."""
        message = Message(conversation_id=conversation_id, sender_type=sender_type, message=text)
        db.add(message)
        await db.execute(
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(updated_at=utcnow())
        )
        await db.commit()
        await db.refresh(message)
        return message

    @staticmethod
    async def get_messages(db: AsyncSession, conversation_id: int, limit: int) -> Sequence[Message]:
        result = await db.execute(
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
            .limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def list_active_with_messages(db: AsyncSession) -> Sequence[RowMapping]:
        def latest(column):
            return (
                select(column)
                .where(Message.conversation_id == Conversation.id)
                .order_by(Message.created_at.desc(), Message.id.desc())
                .limit(1)
                .correlate(Conversation)
                .scalar_subquery()
            )

        message_count = (
            select(func.count(Message.id))
            .where(Message.conversation_id == Conversation.id)
            .correlate(Conversation)
            .scalar_subquery()
        )
        has_messages = exists().where(Message.conversation_id == Conversation.id)

        result = await db.execute(
            select(
                Conversation.id,
                Conversation.session_id,
                Conversation.created_at,
                Conversation.updated_at,
                message_count.label("message_count"),
                latest(Message.message).label("last_message"),
                latest(Message.created_at).label("last_message_time"),
            )
            .where(Conversation.status == "active", has_messages)
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
        )
        return result.mappings().all()

    @staticmethod
    async def delete_created_before(db: AsyncSession, cutoff: datetime) -> int:
        """Deletes conversations created before `cutoff` and their messages. Returns conversations deleted."""
        stale_ids = select(Conversation.id).where(Conversation.created_at < cutoff)
        # Explicit for stores that do not enforce ON DELETE CASCADE (e.g. SQLite without the pragma)
        await db.execute(
            delete(Message)
            .where(Message.conversation_id.in_(stale_ids))
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(
            delete(Conversation)
            .where(Conversation.created_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return result.rowcount
