"""
Deterministic sample-data generator.

Produces:
  - 6 sellers
  - 40 products with purchase / sale prices
  - 300 purchase records, each with 1-5 items
    - ~5 % of records point at a seller that is not in the seller list
    - ~3 % of items point at a sku that is not in the catalog
  - Discounts of 0 / 5 / 10 / 25 %, sometimes omitted entirely
"""

import random
from decimal import Decimal

from sales_analysis.models import SalesDataset

SEED = 42

SELLER_NAMES = [
    "Alexey Petrov",
    "Maria Sidorova",
    "Ivan Smirnov",
    "Olga Kuznetsova",
    "Dmitry Volkov",
    "Elena Morozova",
]

DISCOUNTS = [0, 0, 0, 5, 10, 25]


def _money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


def build_dataset(
    seed: int = SEED,
    seller_count: int = len(SELLER_NAMES),
    product_count: int = 40,
    record_count: int = 300,
) -> dict:
    """Return a raw dataset mapping in the shape ``analyze_sales_data`` accepts."""
    rng = random.Random(seed)

    # ── sellers ──────────────────────────────────────────────────────────────
    sellers = [
        {"id": f"seller_{i + 1}", "name": SELLER_NAMES[i % len(SELLER_NAMES)]}
        for i in range(seller_count)
    ]

    # ── products ─────────────────────────────────────────────────────────────
    products = []
    for i in range(product_count):
        purchase_price = rng.uniform(5, 200)
        products.append({
            "sku": f"SKU_{i + 1:03d}",
            "name": f"Product {i + 1}",
            "purchase_price": _money(purchase_price),
            "sale_price": _money(purchase_price * rng.uniform(1.1, 2.0)),
        })
    price_by_sku = {p["sku"]: p["sale_price"] for p in products}

    # ── purchase records ─────────────────────────────────────────────────────
    records = []
    for _ in range(record_count):
        if rng.random() < 0.05:
            seller_id = "seller_unknown"
        else:
            seller_id = rng.choice(sellers)["id"]

        items = []
        total = Decimal("0")
        for _ in range(rng.randint(1, 5)):
            if rng.random() < 0.03:
                sku = "SKU_MISSING"
            else:
                sku = rng.choice(products)["sku"]
            quantity = rng.randint(1, 10)
            item = {"sku": sku, "quantity": quantity}
            discount = rng.choice(DISCOUNTS)
            if discount or rng.random() < 0.5:
                item["discount"] = discount
            items.append(item)
            if sku in price_by_sku:
                total += price_by_sku[sku] * quantity * (1 - Decimal(discount) / 100)

        records.append({
            "seller_id": seller_id,
            "total_amount": total.quantize(Decimal("0.01")),
            "items": items,
        })

    return {"sellers": sellers, "products": products, "purchase_records": records}


def load_dataset(seed: int = SEED) -> SalesDataset:
    return SalesDataset.model_validate(build_dataset(seed))
