from decimal import Decimal
from typing import List

from inventory_api.core.exceptions import ProductNotFound
from inventory_api.core.logging_config import logger
from inventory_api.core.quantities import to_milli
from inventory_api.db.models import ProductCreate, ProductOut, ProductReplace
from inventory_api.db.repositories.product_repository import ProductRepository


class ProductService:
    """Catalog CRUD; documents are always re-read from storage, never cached."""

    def __init__(self, repo: ProductRepository):
        self.repo = repo
        self.log = logger.bind(service="ProductService")

    async def list_products(self) -> List[ProductOut]:
        docs = await self.repo.list_by_name()
        return [ProductOut.from_document(d) for d in docs]

    async def create_product(self, data: ProductCreate) -> ProductOut:
        doc = await self.repo.create(data.to_document())
        self.log.info(f"created product {doc['_id']} '{data.name}'")
        return ProductOut.from_document(doc)

    async def replace_product(self, product_id: str, data: ProductReplace) -> ProductOut:
        doc = await self.repo.replace(product_id, data.to_document())
        if doc is None:
            raise ProductNotFound(product_id)
        self.log.info(f"replaced product {product_id}")
        return ProductOut.from_document(doc)

    async def rename_and_set_quantity(self, product_id: str, name: str, quantity: Decimal) -> ProductOut:
        """Overwrite only name and quantity, leaving unit and variations untouched."""
        doc = await self.repo.update_fields(product_id, {"name": name, "quantity_milli": to_milli(quantity)})
        if doc is None:
            raise ProductNotFound(product_id)
        self.log.info(f"set name and quantity of product {product_id}")
        return ProductOut.from_document(doc)

    async def delete_product(self, product_id: str) -> None:
        if not await self.repo.delete(product_id):
            raise ProductNotFound(product_id)
        self.log.info(f"deleted product {product_id}")
