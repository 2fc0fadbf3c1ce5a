"""
core/menu_audit.py
────────────────────────────────────────────────────────────────────────
Advisory quota check for a generated week.

The generator is only *asked* to respect the quotas, so results are never
rejected here.  The audit counts the category / historical tags and
reports how far the week drifted, for logging and for the API response.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.models.menu import WeekMenu
from core.quota import QuotaPlan

CATEGORY_TAGS = {
    "main_meat": "(主荤)",
    "half_meat": "(半荤)",
    "vegetarian": "(素菜)",
    "cold": "(凉菜)",
}
HISTORICAL_TAG = "(历史)"


def _normalise(label: str) -> str:
    # full-width brackets are common in generator output
    return label.replace("（", "(").replace("）", ")")


@dataclass
class QuotaAudit:
    historical_expected: int
    historical_found: int
    total_expected: int
    total_found: int
    day_issues: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return (
            not self.day_issues
            and self.historical_found == self.historical_expected
            and self.total_found == self.total_expected
        )

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "historical_expected": self.historical_expected,
            "historical_found": self.historical_found,
            "total_expected": self.total_expected,
            "total_found": self.total_found,
            "day_issues": self.day_issues,
        }


def audit_week_menu(
    menu: WeekMenu,
    plan: QuotaPlan,
    main_meat: int,
    half_meat: int,
    vegetarian: int,
) -> QuotaAudit:
    expected = {
        "main_meat": main_meat,
        "half_meat": half_meat,
        "vegetarian": vegetarian,
        "cold": plan.cold_per_day,
    }
    historical = 0
    total = 0
    issues: dict[str, list[str]] = {}

    for day, dishes in menu.days():
        labels = [_normalise(d) for d in dishes]
        total += len(labels)
        historical += sum(HISTORICAL_TAG in label for label in labels)

        problems = []
        if len(labels) != plan.dishes_per_day:
            problems.append(f"{len(labels)} dishes, expected {plan.dishes_per_day}")
        for category, tag in CATEGORY_TAGS.items():
            found = sum(tag in label for label in labels)
            if found != expected[category]:
                problems.append(f"{category}: {found}, expected {expected[category]}")
        if problems:
            issues[day] = problems

    return QuotaAudit(
        historical_expected=plan.historical_dishes,
        historical_found=historical,
        total_expected=plan.total_dishes,
        total_found=total,
        day_issues=issues,
    )
