from datetime import timedelta
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import ConflictError, NotFoundError
from shared.observability import (
    shop_active_conversations,
    shop_conversation_messages_total,
    shop_conversations_expired_total,
    shop_conversations_started_total,
)
from .models import Conversation, Message, utcnow
from .repository import ConversationRepository
from .schemas import ConversationSummary, MessageResponse

logger = structlog.get_logger(__name__)

DEFAULT_MESSAGE_LIMIT = 100


class ConversationService:
    """
    Buyer/seller conversations.

    A session has at most one active conversation. Starting a conversation
    closes the previous one (it is never reopened or deleted); old rows of
    either status are removed only by the expiry sweep.
    """

    @staticmethod
    async def start_conversation(db: AsyncSession, session_id: str) -> Conversation:
        """Always returns a brand-new active conversation."""
        try:
            conversation = await ConversationRepository.rotate(db, session_id)
        except IntegrityError as e:
            # Another request for this session opened one between our close and insert
            await db.rollback()
            logger.warning("conversation_start_conflict", session_id=session_id)
            raise ConflictError(
                "A conversation is already being started for this session", {"session_id": session_id}
            ) from e

        shop_conversations_started_total.inc()
        logger.info("conversation_started", session_id=session_id, conversation_id=conversation.id)
        return conversation

    @staticmethod
    async def get_or_start(db: AsyncSession, session_id: str) -> Conversation:
        """Returns the session's active conversation, starting one if there is none."""
        conversation = await ConversationRepository.get_active_by_session(db, session_id)
        if conversation:
            return conversation
        return await ConversationService.start_conversation(db, session_id)

    @staticmethod
    async def send_message(db: AsyncSession, conversation_id: int, sender_type: str, text: str) -> Message:
        await ConversationService.require_conversation(db, conversation_id)
        message = await ConversationRepository.add_message(db, conversation_id, sender_type, text)
        shop_conversation_messages_total.labels(sender_type=sender_type).inc()
        logger.info(
            "conversation_message_sent",
            conversation_id=conversation_id,
            sender_type=sender_type,
            preview=text[:50],
        )
        return message

    @staticmethod
    async def get_messages(
        db: AsyncSession, conversation_id: int, limit: int = DEFAULT_MESSAGE_LIMIT
    ) -> List[MessageResponse]:
        messages = await ConversationRepository.get_messages(db, conversation_id, limit)
        return [MessageResponse.model_validate(m) for m in messages]

    @staticmethod
    async def require_conversation(db: AsyncSession, conversation_id: int) -> Conversation:
        conversation = await ConversationRepository.get_by_id(db, conversation_id)
        if not conversation:
            raise NotFoundError(
                f"Conversation {conversation_id} not found", {"conversation_id": conversation_id}
            )
        return conversation

    @staticmethod
    async def list_active_conversations(db: AsyncSession) -> List[ConversationSummary]:
        # Conversations without messages are not a real interaction yet and are left out
        rows = await ConversationRepository.list_active_with_messages(db)
        conversations = [ConversationSummary(**row) for row in rows]
        shop_active_conversations.set(len(conversations))
        return conversations

    @staticmethod
    async def find_by_session(db: AsyncSession, session_id: str) -> Optional[Conversation]:
        return await ConversationRepository.get_active_by_session(db, session_id)

    @staticmethod
    async def expire_older_than(db: AsyncSession, days: int = 1) -> int:
        cutoff = utcnow() - timedelta(days=days)
        deleted = await ConversationRepository.delete_created_before(db, cutoff)
        shop_conversations_expired_total.inc(deleted)
        logger.info("conversations_expired", days=days, deleted=deleted)
        return deleted
