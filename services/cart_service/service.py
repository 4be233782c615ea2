from typing import List

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.schemas import ProductResponse
from shared.exceptions import ConflictError, ValidationError
from shared.observability import shop_cart_additions_total
from .models import CartItem
from .repository import CartRepository
from .schemas import CartLineResponse, CartSummary

logger = structlog.get_logger(__name__)

class CartService:
    @staticmethod
    async def get_cart(db: AsyncSession, session_id: str) -> List[CartLineResponse]:
        items = await CartRepository.get_items(db, session_id)
        return [
            CartLineResponse(
                **ProductResponse.model_validate(item.product).model_dump(),
                cart_id=item.id,
                quantity=item.quantity
            )
            for item in items
        ]

    @staticmethod
    async def get_summary(db: AsyncSession, session_id: str) -> CartSummary:
        items = await CartService.get_cart(db, session_id)
        total = await CartService.get_total(db, session_id)
        return CartSummary(items=items, total=round(total, 2), count=len(items))

    @staticmethod
    async def add_item(db: AsyncSession, session_id: str, product_id: int, quantity: int = 1) -> CartItem:
        """Adds `quantity` of a product; an existing line is incremented, not duplicated.

        The caller is responsible for checking that the product exists.
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="quantity")

        item = CartItem(
            session_id=session_id,
            product_id=product_id,
            quantity=quantity
        )
        try:
            item = await CartRepository.add_item(db, item)
        except IntegrityError as e:
            # A concurrent request inserted the same line first
            await db.rollback()
            raise ConflictError("Cart was modified concurrently, please retry") from e

        shop_cart_additions_total.inc()
        logger.info("cart_item_added", session_id=session_id, product_id=product_id, quantity=item.quantity)
        return item

    @staticmethod
    async def remove_item(db: AsyncSession, session_id: str, cart_id: int) -> None:
        removed = await CartRepository.remove_item(db, session_id, cart_id)
        logger.info("cart_item_removed", session_id=session_id, cart_id=cart_id, removed=removed)

    @staticmethod
    async def clear_cart(db: AsyncSession, session_id: str) -> None:
        removed = await CartRepository.clear_cart(db, session_id)
        logger.info("cart_cleared", session_id=session_id, removed=removed)

    @staticmethod
    async def get_total(db: AsyncSession, session_id: str) -> float:
        return await CartRepository.get_total(db, session_id)

    @staticmethod
    async def count_items(db: AsyncSession, session_id: str) -> int:
        return await CartRepository.count_items(db, session_id)
