from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.session import get_session_id

from .cleanup import cleanup_task
from .schemas import (
    CleanupRequest,
    CleanupResponse,
    ConversationListResponse,
    ConversationStarted,
    MessagesResponse,
    ReplyRequest,
    SendMessageRequest,
    SessionMessagesResponse,
)
from .service import ConversationService

router = APIRouter(prefix="/conversations", tags=["Conversations"])


@router.post("/start", response_model=ConversationStarted)
async def start_conversation(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    conversation = await ConversationService.start_conversation(db, session_id)
    return ConversationStarted(conversationId=conversation.id, sessionId=session_id)


@router.post("/send", response_model=ConversationStarted)
async def send_message(
    payload: SendMessageRequest,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    # The first message of a session opens its conversation; later ones join it
    conversation = await ConversationService.get_or_start(db, session_id)
    await ConversationService.send_message(db, conversation.id, payload.senderType, payload.message)
    return ConversationStarted(conversationId=conversation.id, sessionId=session_id)


@router.get("/messages", response_model=SessionMessagesResponse)
async def get_session_messages(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    conversation = await ConversationService.find_by_session(db, session_id)
    if not conversation:
        return SessionMessagesResponse(data=[], conversationId=None)
    messages = await ConversationService.get_messages(db, conversation.id)
    return SessionMessagesResponse(data=messages, conversationId=conversation.id)


@router.get("/all", response_model=ConversationListResponse)
async def list_active_conversations(db: AsyncSession = Depends(get_db)):
    return ConversationListResponse(data=await ConversationService.list_active_conversations(db))


@router.get("/by-id", response_model=MessagesResponse)
async def get_messages_by_id(
    id: int = Query(...),
    limit: int = Query(default=100, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    await ConversationService.require_conversation(db, id)
    return MessagesResponse(data=await ConversationService.get_messages(db, id, limit))


@router.post("/reply")
async def seller_reply(payload: ReplyRequest, db: AsyncSession = Depends(get_db)):
    await ConversationService.send_message(db, payload.conversationId, "seller", payload.message)
    return {"success": True}


@router.post("/cleanup", response_model=CleanupResponse)
async def cleanup_conversations(
    payload: Optional[CleanupRequest] = None,
    db: AsyncSession = Depends(get_db)
):
    days = payload.days if payload else 1
    deleted = await cleanup_task.run_once(days=days, db=db)
    return CleanupResponse(deleted=deleted, message=f"Deleted {deleted} old conversations")
