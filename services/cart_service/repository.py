from typing import Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from services.product_service.models import Product
from .models import CartItem

class CartRepository:
    @staticmethod
    async def get_items(db: AsyncSession, session_id: str) -> Sequence[CartItem]:
        result = await db.execute(
            select(CartItem)
            .join(Product, CartItem.product_id == Product.id)
            .options(contains_eager(CartItem.product))
            .where(CartItem.session_id == session_id)
            .order_by(CartItem.id)
        )
        return result.scalars().all()

    @staticmethod
    async def get_item(db: AsyncSession, session_id: str, product_id: int) -> Optional[CartItem]:
        result = await db.execute(
            select(CartItem)
            .where(CartItem.session_id == session_id)
            .where(CartItem.product_id == product_id)
            .with_for_update()
        )
        return result.scalars().first()

    @staticmethod
    async def add_item(db: AsyncSession, item: CartItem) -> CartItem:
        existing_item = await CartRepository.get_item(db, item.session_id, item.product_id)

        if existing_item:
            existing_item.quantity += item.quantity
            item = existing_item
        else:
            db.add(item)

        await db.commit()
        return item

    @staticmethod
    async def remove_item(db: AsyncSession, session_id: str, cart_id: int) -> int:
        # The session predicate keeps one session from deleting another's lines
        stmt = delete(CartItem).where(
            CartItem.id == cart_id,
            CartItem.session_id == session_id
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount

    @staticmethod
    async def clear_cart(db: AsyncSession, session_id: str) -> int:
        stmt = delete(CartItem).where(CartItem.session_id == session_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount

    @staticmethod
    async def get_total(db: AsyncSession, session_id: str) -> float:
        result = await db.execute(
            select(func.coalesce(func.sum(Product.price * CartItem.quantity), 0))
            .select_from(CartItem)
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.session_id == session_id)
        )
        return float(result.scalar() or 0)

    @staticmethod
    async def count_items(db: AsyncSession, session_id: str) -> int:
        result = await db.execute(
            select(func.count(CartItem.id))
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.session_id == session_id)
        )
        return int(result.scalar() or 0)
