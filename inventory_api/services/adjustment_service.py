from decimal import Decimal

from pydantic import ValidationError

from inventory_api.core.exceptions import (
    InsufficientStock,
    InvalidAdjustmentType,
    InvalidAdjustmentValue,
    ProductNotFound,
    VariationNotFound,
)
from inventory_api.core.logging_config import logger
from inventory_api.core.quantities import from_milli, round_to_milli, to_milli
from inventory_api.db.models import AdjustmentRequest, AdjustmentType, ProductOut, VariationSale
from inventory_api.db.repositories.product_repository import ProductRepository


class AdjustmentEngine:
    """Turns an adjustment request into a quantity delta and applies it atomically.

    UNIT and WEIGHT deltas are applied as given; both go straight to a single
    ``$inc`` with no prior read. VARIATION sales read the product once to
    resolve the variation weight, then decrement by ``weightKg * quantitySold``.
    That read is outside the atomic step, so a variation edited concurrently
    with a sale may be resolved with its previous weight.
    """

    def __init__(self, repo: ProductRepository, allow_negative: bool = True):
        self.repo = repo
        self.allow_negative = allow_negative
        self.log = logger.bind(service="AdjustmentEngine")

    async def adjust(self, product_id: str, request: AdjustmentRequest) -> ProductOut:
        adjustment_type, value = self._classify(request)
        delta_milli = await self.resolve_delta(product_id, adjustment_type, value)
        self.log.info(f"adjusting {product_id}: {adjustment_type.value} delta={from_milli(delta_milli)}")
        return await self._apply(product_id, delta_milli)

    def _classify(self, request: AdjustmentRequest) -> tuple[AdjustmentType, object]:
        if request.type is None and request.incremento is not None:
            return AdjustmentType.UNIT, request.incremento
        try:
            return AdjustmentType(request.type), request.value
        except (ValueError, TypeError):
            raise InvalidAdjustmentType(request.type)

    async def resolve_delta(self, product_id: str, adjustment_type: AdjustmentType, value) -> int:
        """Return the signed delta in thousandths for a classified request."""
        if adjustment_type in (AdjustmentType.UNIT, AdjustmentType.WEIGHT):
            return self._numeric_delta(adjustment_type, value)

        sale = self._variation_sale(value)
        product = await self.repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        variation = next((v for v in product.get("variations") or [] if v["name"] == sale.name), None)
        if variation is None:
            raise VariationNotFound(product_id, sale.name)
        total_weight = from_milli(variation["weight_kg_milli"]) * sale.quantity_sold
        try:
            return -round_to_milli(total_weight)
        except ValueError as e:
            raise InvalidAdjustmentValue(f"Invalid VARIATION adjustment value: {e}.")

    @staticmethod
    def _numeric_delta(adjustment_type: AdjustmentType, value) -> int:
        # bool is an int subclass; strings are not deltas
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise InvalidAdjustmentValue(f"{adjustment_type.value} adjustment value must be a number.")
        try:
            return to_milli(Decimal(str(value)))
        except ValueError as e:
            raise InvalidAdjustmentValue(f"Invalid {adjustment_type.value} adjustment value: {e}.")

    @staticmethod
    def _variation_sale(value) -> VariationSale:
        if not isinstance(value, dict):
            raise InvalidAdjustmentValue("VARIATION adjustment value must be an object with name and quantitySold.")
        try:
            return VariationSale.model_validate(value)
        except ValidationError as e:
            errors = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
            raise InvalidAdjustmentValue(f"Invalid VARIATION adjustment value: {errors}.")

    async def _apply(self, product_id: str, delta_milli: int) -> ProductOut:
        floor = None if self.allow_negative or delta_milli >= 0 else 0
        doc = await self.repo.increment_quantity(product_id, delta_milli, floor_milli=floor)
        if doc is not None:
            return ProductOut.from_document(doc)

        current = await self.repo.get_by_id(product_id)
        if current is None:
            raise ProductNotFound(product_id)
        # Only reachable when the floor condition rejected the increment
        raise InsufficientStock(
            product_id,
            requested=from_milli(-delta_milli),
            available=from_milli(current.get("quantity_milli", 0)),
        )
