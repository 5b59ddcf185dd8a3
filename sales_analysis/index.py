from typing import Optional
from sales_analysis.models import (
    Product,
    SalesDataset,
    SellerAggregate,
    SellerId,
    Sku,
    catalog_key,
)


class CatalogIndex:
    """Keyed lookups built fresh for a single analysis call."""

    def __init__(self) -> None:
        self.aggregates: dict[str, SellerAggregate] = {}
        self.products: dict[str, Product] = {}

    @classmethod
    def from_dataset(cls, dataset: SalesDataset) -> "CatalogIndex":
        index = cls()
        for seller in dataset.sellers:
            index.add_seller(seller.id, seller.name)
        for product in dataset.products:
            index.add_product(product)
        return index

    # ── writes ────────────────────────────────────────────────────────────────

    def add_seller(self, seller_id: SellerId, name: str) -> None:
        # the aggregate keeps the id as given; only the key is normalised
        self.aggregates[catalog_key(seller_id)] = SellerAggregate(seller_id=seller_id, name=name)

    def add_product(self, product: Product) -> None:
        self.products[catalog_key(product.sku)] = product

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_aggregate(self, seller_id: SellerId) -> Optional[SellerAggregate]:
        return self.aggregates.get(catalog_key(seller_id))

    def get_product(self, sku: Sku) -> Optional[Product]:
        return self.products.get(catalog_key(sku))

    def list_aggregates(self) -> list[SellerAggregate]:
        return list(self.aggregates.values())
