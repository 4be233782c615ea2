from typing import Optional, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from services.cart_service.models import CartItem
from .models import Product

class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product) -> Product:
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_all_products(db: AsyncSession) -> Sequence[Product]:
        result = await db.execute(select(Product).order_by(Product.id))
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[Product]:
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def get_cheapest(db: AsyncSession, limit: int) -> Sequence[Product]:
        result = await db.execute(
            select(Product).order_by(Product.price.asc(), Product.id).limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def get_fastest(db: AsyncSession, location: str, limit: int) -> Sequence[Product]:
        result = await db.execute(
            select(Product)
            .where(Product.warehouse == location)
            .order_by(Product.delivery_days.asc(), Product.id)
            .limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def get_best_rated(db: AsyncSession, limit: int) -> Sequence[Product]:
        result = await db.execute(
            select(Product).order_by(Product.rating.desc(), Product.id).limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def search(db: AsyncSession, term: str) -> Sequence[Product]:
        # Wildcards typed by the user are matched literally
        escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        result = await db.execute(
            select(Product)
            .where(or_(
                func.lower(Product.name).like(pattern, escape="\\"),
                func.lower(Product.category).like(pattern, escape="\\"),
            ))
            .order_by(Product.id)
        )
        return result.scalars().all()

    @staticmethod
    async def get_by_category(db: AsyncSession, category: str) -> Sequence[Product]:
        result = await db.execute(
            select(Product).where(Product.category == category).order_by(Product.id)
        )
        return result.scalars().all()

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int) -> int:
        """Deletes the product and the cart lines pointing at it. Returns rows removed."""
        await db.execute(delete(CartItem).where(CartItem.product_id == product_id))
        result = await db.execute(delete(Product).where(Product.id == product_id))
        await db.commit()
        return result.rowcount

    @staticmethod
    async def set_stock(db: AsyncSession, product_id: int, stock: int) -> int:
        result = await db.execute(
            update(Product).where(Product.id == product_id).values(stock=stock)
        )
        await db.commit()
        return result.rowcount
