from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import DEFAULT_LIST_LIMIT, DEFAULT_WAREHOUSE
from shared.exceptions import NotFoundError
from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductResponse

logger = structlog.get_logger(__name__)


def to_response(products) -> List[ProductResponse]:
    """Shape ORM rows into the external product representation."""
    return [ProductResponse.model_validate(p) for p in products]


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
        product = Product(
            name=data.name,
            price=data.price,
            image=data.image,
            category=data.category,
            rating=data.rating,
            reviews=data.reviews,
            warehouse=data.warehouse,
            delivery_days=data.delivery_days,
            stock=data.stock
        )
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    @staticmethod
    async def list_products(db: AsyncSession) -> List[ProductResponse]:
        return to_response(await ProductRepository.get_all_products(db))

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        return await ProductRepository.get_product_by_id(db, product_id)

    @staticmethod
    async def list_cheapest(db: AsyncSession, limit: int = DEFAULT_LIST_LIMIT) -> List[ProductResponse]:
        return to_response(await ProductRepository.get_cheapest(db, limit))

    @staticmethod
    async def list_fastest(
        db: AsyncSession, location: str = DEFAULT_WAREHOUSE, limit: int = DEFAULT_LIST_LIMIT
    ) -> List[ProductResponse]:
        return to_response(await ProductRepository.get_fastest(db, location, limit))

    @staticmethod
    async def list_best_rated(db: AsyncSession, limit: int = DEFAULT_LIST_LIMIT) -> List[ProductResponse]:
        return to_response(await ProductRepository.get_best_rated(db, limit))

    @staticmethod
    async def search(db: AsyncSession, term: str) -> List[ProductResponse]:
        term = term.strip()
        if not term:
            return []
        return to_response(await ProductRepository.search(db, term))

    @staticmethod
    async def list_by_category(db: AsyncSession, category: str) -> List[ProductResponse]:
        return to_response(await ProductRepository.get_by_category(db, category))

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int) -> None:
        # Deleting an unknown id is a successful no-op
        deleted = await ProductRepository.delete_product(db, product_id)
        logger.info("product_deleted", product_id=product_id, deleted=deleted)

    @staticmethod
    async def update_stock(db: AsyncSession, product_id: int, stock: int) -> None:
        updated = await ProductRepository.set_stock(db, product_id, stock)
        if not updated:
            raise NotFoundError(f"Product {product_id} not found", {"product_id": product_id})
        logger.info("product_stock_updated", product_id=product_id, stock=stock)
