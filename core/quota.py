"""
core/quota.py
────────────────────────────────────────────────────────────────────────
Exact weekly dish quotas for one generation request.

All rounding is round-half-up on exact integer arithmetic, so
`QuotaPlan.build(8, 3, 30)` gives 16.5 → 17 historical dishes
(never 16, and never a float artefact).
"""

from __future__ import annotations

from dataclasses import dataclass

DAYS_PER_WEEK = 5


class DishSplitError(ValueError):
    """Hot-dish sub-counts do not add up to the canteen's hot dish count."""


def _round_half_up(num: int, den: int) -> int:
    # num / den rounded half-up, for num >= 0 and den > 0
    return (2 * num + den) // (2 * den)


@dataclass(frozen=True)
class QuotaPlan:
    hot_per_day: int
    cold_per_day: int
    total_dishes: int
    historical_dishes: int
    original_dishes: int
    suggested_daily_historical: int

    @property
    def dishes_per_day(self) -> int:
        return self.hot_per_day + self.cold_per_day

    @classmethod
    def build(cls, hot: int, cold: int, historical_ratio: int) -> "QuotaPlan":
        ratio = min(max(historical_ratio, 0), 100)
        total = (hot + cold) * DAYS_PER_WEEK
        historical = _round_half_up(total * ratio, 100)
        return cls(
            hot_per_day=hot,
            cold_per_day=cold,
            total_dishes=total,
            historical_dishes=historical,
            original_dishes=total - historical,
            suggested_daily_historical=_round_half_up(historical, DAYS_PER_WEEK),
        )


def check_hot_split(hot: int, main_meat: int, half_meat: int, vegetarian: int) -> None:
    """Reject a main/half/vegetarian split that does not sum to `hot`."""
    if main_meat + half_meat + vegetarian != hot:
        raise DishSplitError(
            f"main({main_meat}) + half({half_meat}) + vegetarian({vegetarian}) "
            f"must equal hot dish count {hot}"
        )
