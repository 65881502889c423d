from typing import List

from fastapi import APIRouter, Depends, status

from inventory_api.core.config import get_settings
from inventory_api.db import mongo_client
from inventory_api.db.models import AdjustmentRequest, MsgDetail, ProductCreate, ProductOut, ProductReplace
from inventory_api.db.repositories.product_repository import ProductRepository
from inventory_api.services.adjustment_service import AdjustmentEngine
from inventory_api.services.product_service import ProductService

router = APIRouter()

NOT_FOUND = {404: {"model": MsgDetail, "description": "Product not found"}}


def get_product_repository() -> ProductRepository:
    settings = get_settings()
    return ProductRepository(
        mongo_client.get_database(),
        collection_name=settings.PRODUCTS_COLLECTION,
        timeout=settings.STORAGE_TIMEOUT_SECONDS,
    )


def get_product_service(repo: ProductRepository = Depends(get_product_repository)) -> ProductService:
    return ProductService(repo)


def get_adjustment_engine(repo: ProductRepository = Depends(get_product_repository)) -> AdjustmentEngine:
    return AdjustmentEngine(repo, allow_negative=get_settings().ALLOW_NEGATIVE_STOCK)


@router.get("", response_model=List[ProductOut], summary="List products sorted by name")
async def list_products(service: ProductService = Depends(get_product_service)):
    return await service.list_products()


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED, summary="Create product")
async def create_product(product_in: ProductCreate, service: ProductService = Depends(get_product_service)):
    return await service.create_product(product_in)


@router.patch(
    "/{product_id}",
    response_model=ProductOut,
    summary="Adjust stock quantity",
    responses={
        **NOT_FOUND,
        400: {"model": MsgDetail, "description": "Invalid adjustment type or value"},
        409: {"model": MsgDetail, "description": "Adjustment would take stock below zero"},
    },
)
async def adjust_product(
    product_id: str,
    adjustment: AdjustmentRequest,
    engine: AdjustmentEngine = Depends(get_adjustment_engine),
):
    return await engine.adjust(product_id, adjustment)


@router.put("/{product_id}", response_model=ProductOut, summary="Replace product", responses=NOT_FOUND)
async def replace_product(
    product_id: str,
    product_in: ProductReplace,
    service: ProductService = Depends(get_product_service),
):
    return await service.replace_product(product_id, product_in)


@router.delete("/{product_id}", response_model=MsgDetail, summary="Delete product", responses=NOT_FOUND)
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    await service.delete_product(product_id)
    return MsgDetail(message="Product deleted.")
