"""Domain errors raised by the adjustment engine, the catalog service and the repository."""


class InventoryError(Exception):
    """Base class for inventory errors; ``message`` is returned to the caller."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ProductNotFound(InventoryError):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found.")
        self.product_id = product_id


class VariationNotFound(InventoryError):
    def __init__(self, product_id: str, variation_name: str):
        super().__init__(f"Variation '{variation_name}' not found for product {product_id}.")
        self.product_id = product_id
        self.variation_name = variation_name


class InvalidAdjustmentType(InventoryError):
    def __init__(self, adjustment_type):
        super().__init__(
            f"Invalid adjustment type {adjustment_type!r}. Allowed types: UNIT, WEIGHT, VARIATION."
        )
        self.adjustment_type = adjustment_type


class InvalidAdjustmentValue(InventoryError):
    """Raised for malformed values and for request bodies that fail validation."""
    pass


class InsufficientStock(InventoryError):
    def __init__(self, product_id: str, requested, available):
        super().__init__(
            f"Insufficient stock for product {product_id}. Requested: {requested}, available: {available}."
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class StorageFailure(InventoryError):
    """The storage round-trip failed or timed out; a timed-out write may still have been applied."""
    pass
