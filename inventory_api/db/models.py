from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from inventory_api.core.quantities import from_milli, round_to_milli, to_milli

# Decimals go out as JSON numbers, not strings
Quantity = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Unit(str, Enum):
    UNIT = "UNIT"
    WEIGHT = "WEIGHT"


class AdjustmentType(str, Enum):
    UNIT = "UNIT"
    WEIGHT = "WEIGHT"
    VARIATION = "VARIATION"


class Variation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Unique within the parent product")
    weight_kg: Quantity = Field(..., gt=0, alias="weightKg")

    @field_validator("weight_kg")
    @classmethod
    def check_weight_precision(cls, value: Decimal) -> Decimal:
        to_milli(value)
        return value

    def to_document(self) -> dict:
        return {"name": self.name, "weight_kg_milli": to_milli(self.weight_kg)}

    @classmethod
    def from_document(cls, doc: dict) -> "Variation":
        return cls(name=doc["name"], weight_kg=from_milli(doc["weight_kg_milli"]))


class ProductBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    quantity: Quantity
    unit: Unit
    variations: list[Variation]

    @field_validator("quantity")
    @classmethod
    def check_quantity_precision(cls, value: Decimal) -> Decimal:
        to_milli(value)
        return value

    @field_validator("variations")
    @classmethod
    def unique_variation_names(cls, variations: list[Variation]) -> list[Variation]:
        names = [v.name for v in variations]
        duplicated = sorted({n for n in names if names.count(n) > 1})
        if duplicated:
            raise ValueError(f"duplicated variation names: {', '.join(duplicated)}")
        return variations

    def to_document(self) -> dict:
        return {
            "name": self.name,
            "quantity_milli": to_milli(self.quantity),
            "unit": self.unit.value,
            "variations": [v.to_document() for v in self.variations],
        }


class ProductCreate(ProductBase):
    quantity: Quantity = Decimal(0)
    variations: list[Variation] = []


class ProductReplace(ProductBase):
    """Full payload for PUT; every mutable field is required."""
    pass


class ProductOut(ProductBase):
    id: str = Field(..., alias="_id")

    @classmethod
    def from_document(cls, doc: dict) -> "ProductOut":
        if "quantity_milli" not in doc:
            doc = {**doc, **legacy_to_current(doc)}
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            quantity=from_milli(doc["quantity_milli"]),
            unit=doc.get("unit", Unit.UNIT.value),
            variations=[Variation.from_document(v) for v in doc.get("variations") or []],
        )


class LegacyProductIn(BaseModel):
    """Body of the first client revision on /produtos; those products are always counted in units."""

    model_config = ConfigDict(str_strip_whitespace=True)

    nome: str = Field(..., min_length=1)
    quantidade: Quantity = Decimal(0)

    @field_validator("quantidade")
    @classmethod
    def check_quantity_precision(cls, value: Decimal) -> Decimal:
        to_milli(value)
        return value

    def to_create(self) -> ProductCreate:
        return ProductCreate(name=self.nome, quantity=self.quantidade, unit=Unit.UNIT)


class LegacyProductReplace(LegacyProductIn):
    quantidade: Quantity


class LegacyProductOut(ProductOut):
    """Current product shape plus the ``nome``/``quantidade`` fields the first client reads."""

    nome: str
    quantidade: Quantity

    @classmethod
    def from_product(cls, product: ProductOut) -> "LegacyProductOut":
        return cls.model_validate({**product.model_dump(), "nome": product.name, "quantidade": product.quantity})


class AdjustmentRequest(BaseModel):
    """Raw PATCH body; the engine interprets ``value`` according to ``type``."""

    type: Any = None
    value: Any = None
    incremento: Any = None  # first client revision sent {"incremento": n}


class VariationSale(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    quantity_sold: Decimal = Field(..., gt=0, alias="quantitySold")


class MsgDetail(BaseModel):
    message: str


def legacy_to_current(doc: dict) -> dict:
    """Current-schema fields for a document written by the first client revision.

    Those documents carry only ``nome`` and ``quantidade`` (a plain number of units).
    """
    return {
        "name": doc.get("name", doc.get("nome")),
        "quantity_milli": round_to_milli(Decimal(str(doc.get("quantidade") or 0))),
        "unit": doc.get("unit", Unit.UNIT.value),
        "variations": doc.get("variations") or [],
    }
