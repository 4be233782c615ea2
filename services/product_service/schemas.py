from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    rating: float = Field(default=0, ge=0, le=5)
    reviews: int = Field(default=0, ge=0)
    warehouse: Optional[str] = None
    delivery_days: int = Field(ge=0, validation_alias=AliasChoices("delivery_days", "deliveryDays"))
    stock: int = Field(ge=0)

class ProductDelete(BaseModel):
    productId: int

class StockUpdate(BaseModel):
    productId: int
    stock: int = Field(ge=0)

class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    image: Optional[str] = None
    category: Optional[str] = None
    rating: float
    reviews: int
    warehouse: Optional[str] = None
    delivery_days: int = Field(alias="deliveryDays")
    stock: int

    class Config:
        from_attributes = True
        populate_by_name = True

class ProductListResponse(BaseModel):
    success: bool = True
    data: List[ProductResponse]

class ProductCreated(BaseModel):
    success: bool = True
    message: str = "Product added successfully"
    productId: int
