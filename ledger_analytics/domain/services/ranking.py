"""Ordering and top-N normalization for aggregated amounts."""

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from ledger_analytics.domain.models import CategoryAmount, RadarPoint

_HUNDRED = Decimal("100")


def rank_categories(totals: Mapping[str, Decimal]) -> list[CategoryAmount]:
    """Order category totals for display.

    Categories with a zero total are dropped.

    Args:
        totals: Category name to summed amount.

    Returns:
        list[CategoryAmount]: Largest amount first, ties by name ascending.
    """
    ranked = sorted(
        (
            (category, amount)
            for category, amount in totals.items()
            if amount != 0
        ),
        key=lambda item: (-item[1], item[0]),
    )
    return [
        CategoryAmount(category=category, amount=amount)
        for category, amount in ranked
    ]


def scale_to_percent(amount: Decimal, maximum: Decimal) -> int:
    """Return amount as a rounded 0-100 share of maximum (half-up)."""
    share = (_HUNDRED * amount / maximum).quantize(
        Decimal("1"),
        rounding=ROUND_HALF_UP,
    )
    return int(share)


def normalize_top_categories(
    breakdown: Sequence[CategoryAmount],
    top_n: int,
) -> list[RadarPoint]:
    """Rescale the top categories relative to the largest one.

    Args:
        breakdown: Categories already ordered by rank_categories.
        top_n: Number of leading categories to keep.

    Returns:
        list[RadarPoint]: Values in [0, 100]; empty when nothing to scale.
    """
    selected = list(breakdown[:top_n])
    if not selected:
        return []
    maximum = max(item.amount for item in selected)
    if maximum <= 0:
        return []
    return [
        RadarPoint(
            category=item.category,
            value=scale_to_percent(item.amount, maximum),
        )
        for item in selected
    ]


__all__ = [
    "rank_categories",
    "scale_to_percent",
    "normalize_top_categories",
]
