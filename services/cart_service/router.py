from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.service import ProductService
from shared.config.database import get_db
from shared.exceptions import NotFoundError
from shared.session import get_session_id

from .schemas import CartAddResponse, CartItemCreate, CartItemRemove, CartResponse
from .service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartResponse)
async def get_cart(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    return CartResponse(data=await CartService.get_summary(db, session_id))


@router.post("/add", response_model=CartAddResponse)
async def add_item(
    payload: CartItemCreate,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.get_product_by_id(db, payload.productId)
    if not product:
        raise NotFoundError("Product not found", {"product_id": payload.productId})

    await CartService.add_item(db, session_id, product.id, payload.quantity)
    return CartAddResponse(
        message=f"{product.name} added to cart",
        cartCount=await CartService.count_items(db, session_id)
    )


@router.post("/remove")
async def remove_item(
    payload: CartItemRemove,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    await CartService.remove_item(db, session_id, payload.cartId)
    return {"success": True, "message": "Item removed from cart"}


@router.api_route("/clear", methods=["DELETE", "POST"])
async def clear_cart(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Deletes all items in the session cart."""
    await CartService.clear_cart(db, session_id)
    return {"success": True, "message": "Cart cleared"}
