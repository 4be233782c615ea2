from typing import List, Optional

from pydantic import BaseModel, Field

from services.product_service.schemas import ProductResponse

class ChatRequest(BaseModel):
    message: str = ""

class ChatReply(BaseModel):
    content: str = ""
    products: Optional[List[ProductResponse]] = None
    filter_type: Optional[str] = Field(default=None, alias="filterType")
    quick_replies: Optional[List[str]] = Field(default=None, alias="quickReplies")

    class Config:
        populate_by_name = True

class ChatResponse(BaseModel):
    success: bool = True
    data: ChatReply
