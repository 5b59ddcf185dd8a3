import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from pydantic import ValidationError

from sales_analysis.config import AnalysisSettings, get_settings
from sales_analysis.errors import InvalidInputError, InvalidOptionsError
from sales_analysis.index import CatalogIndex
from sales_analysis.models import (
    AnalysisOptions,
    ReportRow,
    SalesDataset,
    SellerAggregate,
    TopProduct,
    catalog_key,
)

logger = logging.getLogger(__name__)

_COLLECTIONS = ("sellers", "products", "purchase_records")
_POLICIES = ("calculate_revenue", "calculate_bonus")


def _load_dataset(data: Any) -> SalesDataset:
    if isinstance(data, SalesDataset):
        for key in _COLLECTIONS:
            if not getattr(data, key):
                raise InvalidInputError(f"'{key}' must be a non-empty sequence")
        return data

    if not isinstance(data, Mapping):
        raise InvalidInputError("Sales data must be a mapping of sellers, products and purchase_records")

    for key in _COLLECTIONS:
        value = data.get(key)
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) == 0:
            raise InvalidInputError(f"'{key}' must be a non-empty sequence")

    try:
        return SalesDataset.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidInputError(f"Malformed sales data ({exc.error_count()} invalid field(s))") from exc


def _load_options(options: Any) -> AnalysisOptions:
    if isinstance(options, AnalysisOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionsError("Options must be a mapping or AnalysisOptions")

    missing = [name for name in _POLICIES if options.get(name) is None]
    if missing:
        raise InvalidOptionsError(f"Missing policy function(s): {', '.join(missing)}")

    try:
        return AnalysisOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise InvalidOptionsError("Policy functions must be callable") from exc


def _as_decimal(value: Any, policy: str) -> Decimal:
    # policies may hand back floats or ints
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"{policy} returned a non-numeric value: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"{policy} returned a non-finite value: {value!r}")
    return result


def _top_products(aggregate: SellerAggregate, limit: int) -> list[TopProduct]:
    ranked = sorted(aggregate.products_sold.items(), key=lambda kv: kv[1], reverse=True)
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def analyze_sales_data(
    data: Any,
    options: Any,
    settings: Optional[AnalysisSettings] = None,
) -> list[ReportRow]:
    """
    Rank sellers by profit and build one report row per seller.

    ``data`` is a SalesDataset or a mapping with ``sellers``, ``products`` and
    ``purchase_records``; ``options`` is an AnalysisOptions or a mapping with
    ``calculate_revenue`` and ``calculate_bonus``. Both are checked before any
    record is processed.

    Records for unknown sellers and items for unknown skus are skipped.
    Rows come back in descending profit order; sellers with equal profit keep
    their input order.
    """
    dataset = _load_dataset(data)
    policies = _load_options(options)
    settings = settings or get_settings()

    # ── 1. Aggregates per seller, products by sku ────────────────────────────
    index = CatalogIndex.from_dataset(dataset)

    # ── 2. Single pass over purchase records ─────────────────────────────────
    skipped_records = 0
    skipped_items = 0

    for record in dataset.purchase_records:
        aggregate = index.get_aggregate(record.seller_id)
        if aggregate is None:
            logger.debug("Skipping record for unknown seller %r", record.seller_id)
            skipped_records += 1
            continue

        aggregate.sales_count += 1
        aggregate.revenue += record.total_amount

        for item in record.items:
            product = index.get_product(item.sku)
            if product is None:
                logger.debug("Skipping item with unknown sku %r", item.sku)
                skipped_items += 1
                continue

            cost = product.purchase_price * item.quantity
            item_revenue = _as_decimal(policies.calculate_revenue(item, product), "calculate_revenue")
            aggregate.total_profit += item_revenue - cost
            sku = catalog_key(item.sku)
            aggregate.products_sold[sku] = aggregate.products_sold.get(sku, 0) + item.quantity

    # ── 3. Rank by profit ────────────────────────────────────────────────────
    ranked = sorted(index.list_aggregates(), key=lambda a: a.total_profit, reverse=True)
    total = len(ranked)

    # ── 4. Bonuses, top products and rounding ────────────────────────────────
    places = Decimal(10) ** -settings.money_places

    def _money(value: Decimal) -> Decimal:
        return value.quantize(places, rounding=ROUND_HALF_UP)

    rows: list[ReportRow] = []
    for rank, aggregate in enumerate(ranked):
        aggregate.bonus = _as_decimal(policies.calculate_bonus(rank, total, aggregate), "calculate_bonus")
        rows.append(
            ReportRow(
                seller_id=aggregate.seller_id,
                name=aggregate.name,
                sales_count=aggregate.sales_count,
                revenue=_money(aggregate.revenue),
                profit=_money(aggregate.total_profit),
                bonus=_money(aggregate.bonus),
                top_products=_top_products(aggregate, settings.top_products_limit),
            )
        )

    logger.info(
        "Analyzed %d purchase records for %d sellers (%d records, %d items skipped)",
        len(dataset.purchase_records), total, skipped_records, skipped_items,
    )
    return rows
