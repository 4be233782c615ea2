from typing import List

from pydantic import BaseModel, Field

from services.product_service.schemas import ProductResponse

class CartItemCreate(BaseModel):
    productId: int
    quantity: int = Field(default=1, ge=1)

class CartItemRemove(BaseModel):
    cartId: int

class CartLineResponse(ProductResponse):
    """Product fields plus the owning cart line."""
    cart_id: int
    quantity: int

class CartSummary(BaseModel):
    items: List[CartLineResponse] = []
    total: float = 0
    count: int = 0

class CartResponse(BaseModel):
    success: bool = True
    data: CartSummary

class CartAddResponse(BaseModel):
    success: bool = True
    message: str
    cartCount: int
