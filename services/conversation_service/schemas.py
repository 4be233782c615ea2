from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

SenderType = Literal["buyer", "seller"]

class SendMessageRequest(BaseModel):
    message: str = Field(min_length=1)
    senderType: SenderType = "buyer"

class ReplyRequest(BaseModel):
    conversationId: int
    message: str = Field(min_length=1)

class CleanupRequest(BaseModel):
    days: int = Field(default=1, ge=0)

class MessageResponse(BaseModel):
    id: int
    sender_type: SenderType
    message: str
    created_at: datetime

    class Config:
        from_attributes = True

class ConversationSummary(BaseModel):
    id: int
    session_id: str
    created_at: datetime
    updated_at: datetime
    message_count: int
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None

class ConversationStarted(BaseModel):
    success: bool = True
    conversationId: int
    sessionId: str

class SessionMessagesResponse(BaseModel):
    success: bool = True
    data: List[MessageResponse] = []
    conversationId: Optional[int] = None

class MessagesResponse(BaseModel):
    success: bool = True
    data: List[MessageResponse] = []

class ConversationListResponse(BaseModel):
    success: bool = True
    data: List[ConversationSummary] = []

class CleanupResponse(BaseModel):
    success: bool = True
    deleted: int
    message: str
