from decimal import Decimal

from sales_analysis.models import AnalysisOptions, Item, Product, SellerAggregate

_HUNDRED = Decimal("100")

# Share of total profit paid as bonus, by rank bracket
_BONUS_RATES: dict[str, Decimal] = {
    "leader": Decimal("0.15"),   # rank 0
    "podium": Decimal("0.10"),   # ranks 1 and 2
    "last":   Decimal("0"),      # bottom of the table
    "rest":   Decimal("0.05"),
}


def calculate_simple_revenue(item: Item, product: Product) -> Decimal:
    """Sale price less the item's percentage discount, times quantity."""
    final_price = product.sale_price * (1 - item.discount / _HUNDRED)
    return final_price * item.quantity


def bonus_rate(index: int, total: int) -> Decimal:
    # leader wins over last place, so a lone seller still gets the top rate
    if index == 0:
        return _BONUS_RATES["leader"]
    if index in (1, 2):
        return _BONUS_RATES["podium"]
    if index == total - 1:
        return _BONUS_RATES["last"]
    return _BONUS_RATES["rest"]


def calculate_bonus_by_profit(index: int, total: int, seller: SellerAggregate) -> Decimal:
    return seller.total_profit * bonus_rate(index, total)


def default_options() -> AnalysisOptions:
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
    )
