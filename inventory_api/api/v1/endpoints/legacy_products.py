from typing import List

from fastapi import APIRouter, Depends, status

from inventory_api.api.v1.endpoints.products import get_adjustment_engine, get_product_service
from inventory_api.db.models import (
    AdjustmentRequest,
    LegacyProductIn,
    LegacyProductOut,
    LegacyProductReplace,
    MsgDetail,
)
from inventory_api.services.adjustment_service import AdjustmentEngine
from inventory_api.services.product_service import ProductService

# Routes kept for the first storefront client: {nome, quantidade} bodies, unit-counted products
router = APIRouter()


@router.get("", response_model=List[LegacyProductOut])
async def list_products(service: ProductService = Depends(get_product_service)):
    return [LegacyProductOut.from_product(p) for p in await service.list_products()]


@router.post("", response_model=LegacyProductOut, status_code=status.HTTP_201_CREATED)
async def create_product(product_in: LegacyProductIn, service: ProductService = Depends(get_product_service)):
    return LegacyProductOut.from_product(await service.create_product(product_in.to_create()))


@router.patch("/{product_id}", response_model=LegacyProductOut)
async def adjust_product(
    product_id: str,
    adjustment: AdjustmentRequest,
    engine: AdjustmentEngine = Depends(get_adjustment_engine),
):
    return LegacyProductOut.from_product(await engine.adjust(product_id, adjustment))


@router.put("/{product_id}", response_model=LegacyProductOut)
async def replace_product(
    product_id: str,
    product_in: LegacyProductReplace,
    service: ProductService = Depends(get_product_service),
):
    product = await service.rename_and_set_quantity(product_id, product_in.nome, product_in.quantidade)
    return LegacyProductOut.from_product(product)


@router.delete("/{product_id}", response_model=MsgDetail)
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    await service.delete_product(product_id)
    return MsgDetail(message="Produto excluído com sucesso.")
