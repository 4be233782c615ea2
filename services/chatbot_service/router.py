from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.cart_service.service import CartService
from shared.config.database import get_db
from shared.session import get_session_id

from .schemas import ChatRequest, ChatResponse
from .service import ChatbotService

router = APIRouter(tags=["Chatbot"])
chatbot_service = ChatbotService() # Rules are built once


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(
    payload: ChatRequest,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    cart_count = await CartService.count_items(db, session_id)
    reply = await chatbot_service.process_message(db, payload.message, cart_count)
    return ChatResponse(data=reply)
