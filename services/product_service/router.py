from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import DEFAULT_LIST_LIMIT, DEFAULT_WAREHOUSE
from .schemas import ProductCreate, ProductCreated, ProductDelete, ProductListResponse, StockUpdate
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Catalog"])


@router.get("", response_model=ProductListResponse)
async def list_products(db: AsyncSession = Depends(get_db)):
    return ProductListResponse(data=await ProductService.list_products(db))

@router.get("/cheapest", response_model=ProductListResponse)
async def list_cheapest(
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=0),
    db: AsyncSession = Depends(get_db)
):
    return ProductListResponse(data=await ProductService.list_cheapest(db, limit))

@router.get("/fastest", response_model=ProductListResponse)
async def list_fastest(
    location: str = Query(default=DEFAULT_WAREHOUSE),
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=0),
    db: AsyncSession = Depends(get_db)
):
    return ProductListResponse(data=await ProductService.list_fastest(db, location, limit))

@router.get("/best", response_model=ProductListResponse)
async def list_best_rated(
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=0),
    db: AsyncSession = Depends(get_db)
):
    return ProductListResponse(data=await ProductService.list_best_rated(db, limit))

@router.get("/search", response_model=ProductListResponse)
async def search_products(
    q: str = Query(default=""),
    db: AsyncSession = Depends(get_db)
):
    return ProductListResponse(data=await ProductService.search(db, q))

@router.get("/category/{category}", response_model=ProductListResponse)
async def list_by_category(category: str, db: AsyncSession = Depends(get_db)):
    return ProductListResponse(data=await ProductService.list_by_category(db, category))


@router.post("/add", response_model=ProductCreated)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_db)
):
    created = await ProductService.create_product(db, product)
    return ProductCreated(productId=created.id)

@router.post("/delete")
async def delete_product(payload: ProductDelete, db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, payload.productId)
    return {"success": True, "message": "Product deleted successfully"}

@router.post("/update-stock")
async def update_stock(payload: StockUpdate, db: AsyncSession = Depends(get_db)):
    await ProductService.update_stock(db, payload.productId, payload.stock)
    return {"success": True, "message": "Stock updated successfully"}
