from pydantic import BaseModel, Field, field_validator
from decimal import Decimal
from typing import Any, Callable, Union

SellerId = Union[str, int]
Sku = Union[str, int]
Quantity = Union[int, Decimal]


def catalog_key(value: Union[str, int]) -> str:
    """Lookup key for seller ids and skus: ``1`` and ``"1"`` are the same entry."""
    return str(value)


class Seller(BaseModel):
    id: SellerId
    name: str


class Product(BaseModel):
    sku: Sku
    purchase_price: Decimal
    sale_price: Decimal


class Item(BaseModel):
    sku: Sku
    quantity: Quantity
    discount: Decimal = Decimal("0")  # percent, e.g. Decimal("15") for 15 %

    @field_validator("discount", mode="before")
    @classmethod
    def _missing_discount_is_zero(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value


class PurchaseRecord(BaseModel):
    seller_id: SellerId
    total_amount: Decimal
    items: list[Item] = []


class SalesDataset(BaseModel):
    sellers: list[Seller] = Field(min_length=1)
    products: list[Product] = Field(min_length=1)
    purchase_records: list[PurchaseRecord] = Field(min_length=1)


# ── Per-call accumulator ─────────────────────────────────────────────────────

class SellerAggregate(BaseModel):
    seller_id: SellerId
    name: str
    sales_count: int = 0
    revenue: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    bonus: Decimal = Decimal("0")
    # sku → quantity, in first-sold order
    products_sold: dict[str, Quantity] = {}


class AnalysisOptions(BaseModel):
    calculate_revenue: Callable[[Item, Product], Any]
    calculate_bonus: Callable[[int, int, SellerAggregate], Any]


# ── Response models ──────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: Quantity


class ReportRow(BaseModel):
    seller_id: SellerId
    name: str
    sales_count: int
    revenue: Decimal
    profit: Decimal
    bonus: Decimal
    top_products: list[TopProduct]
