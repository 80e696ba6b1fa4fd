# trip_budget/plan.py
"""
Budget Plan (Allocator)
-----------------------

Splits a trip budget across the fixed categories in two passes:

1. Provisional split proportional to the weights.
2. Categories that landed below their minimum are lifted to it, and the
   total deficit is taken from the remaining ("flexible") categories in
   proportion to their weights.

Only one redistribution pass is made. A flexible category is checked against
zero after the reduction, not against its own minimum.
"""

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .config import ALLOCATION_TOLERANCE, DEFAULT_MINIMUM, DEFAULT_WEIGHT
from .errors import (
    AllocationInconsistency,
    DegenerateWeights,
    InfeasiblePlan,
    InvalidArgument,
)
from .models import AllocationTrace, Category
from .report import render_report
from .utils import Number, to_decimal

logger = logging.getLogger(__name__)


class BudgetPlan:
    """
    Staged plan: construct with budget and days, set minimums and weights,
    call allocate(), then read allocations for reporting.
    """

    def __init__(self, total_budget: Number, trip_days: int):
        budget = to_decimal(total_budget, "total budget")
        if budget <= 0:
            raise InvalidArgument("Budget must be positive")

        if isinstance(trip_days, bool) or not isinstance(trip_days, int):
            raise InvalidArgument(f"Trip days must be a whole number, got {trip_days!r}")
        if trip_days <= 0:
            raise InvalidArgument("Trip duration must be at least 1 day")

        self._total_budget = budget
        self._trip_days = trip_days
        self._minimums = {cat: DEFAULT_MINIMUM for cat in Category}
        self._weights = {cat: DEFAULT_WEIGHT for cat in Category}
        self._allocations = {cat: Decimal("0") for cat in Category}
        self._trace: Optional[AllocationTrace] = None

    def __repr__(self) -> str:
        return (
            f"BudgetPlan(total_budget={self._total_budget}, "
            f"trip_days={self._trip_days}, allocated={self.is_allocated})"
        )

    # ---------------------------------------------------------
    # Read-only views
    # ---------------------------------------------------------
    @property
    def total_budget(self) -> Decimal:
        return self._total_budget

    @property
    def trip_days(self) -> int:
        return self._trip_days

    @property
    def minimums(self) -> Dict[Category, Decimal]:
        return dict(self._minimums)

    @property
    def weights(self) -> Dict[Category, Decimal]:
        return dict(self._weights)

    @property
    def allocations(self) -> Dict[Category, Decimal]:
        return dict(self._allocations)

    @property
    def trace(self) -> Optional[AllocationTrace]:
        return self._trace

    @property
    def is_allocated(self) -> bool:
        return self._trace is not None

    # ---------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------
    def set_minimum(self, category: Category, minimum: Number) -> None:
        _check_category(category)
        value = to_decimal(minimum, f"minimum for {category.label}")
        if value < 0:
            raise InvalidArgument("Minimum cannot be negative")
        self._minimums[category] = value

    def set_weight(self, category: Category, weight: Number) -> None:
        _check_category(category)
        value = to_decimal(weight, f"weight for {category.label}")
        if value < 0:
            raise InvalidArgument("Weight cannot be negative")
        self._weights[category] = value

    # ---------------------------------------------------------
    # Allocation
    # ---------------------------------------------------------
    def allocate(self) -> Dict[Category, Decimal]:
        """
        Recompute allocations from scratch.
        Nothing is written to the plan unless the whole run succeeds.
        """
        total_weights = sum(self._weights.values(), Decimal("0"))
        if total_weights == 0:
            raise DegenerateWeights("Cannot allocate budget when every weight is zero")

        provisional = {
            cat: self._total_budget * self._weights[cat] / total_weights
            for cat in Category
        }
        logger.debug("Provisional split: %s", {c.label: str(v) for c, v in provisional.items()})

        under_minimum = tuple(
            cat for cat in Category if provisional[cat] < self._minimums[cat]
        )
        flexible = tuple(cat for cat in Category if cat not in under_minimum)

        allocations = dict(provisional)
        total_deficit = Decimal("0")

        if under_minimum:
            total_deficit = self._redistribute(
                allocations, provisional, under_minimum, flexible
            )

        total = sum(allocations.values(), Decimal("0"))
        if abs(total - self._total_budget) > ALLOCATION_TOLERANCE:
            raise AllocationInconsistency(
                f"Allocation error - totals don't match ({total} != {self._total_budget})"
            )

        self._allocations = allocations
        self._trace = AllocationTrace(
            provisional=MappingProxyType(dict(provisional)),
            under_minimum=under_minimum,
            flexible=flexible,
            total_deficit=total_deficit,
            redistributed=bool(under_minimum),
        )
        return dict(allocations)

    def _redistribute(self, allocations, provisional, under_minimum, flexible) -> Decimal:
        total_deficit = sum(
            (self._minimums[cat] - provisional[cat] for cat in under_minimum),
            Decimal("0"),
        )

        if not flexible:
            logger.warning("No flexible category left to absorb deficit %s", total_deficit)
            raise InfeasiblePlan("Cannot meet all minimum requirements with current budget")

        total_flexible_weights = sum(
            (self._weights[cat] for cat in flexible), Decimal("0")
        )
        if total_flexible_weights == 0:
            logger.warning("Flexible categories carry no weight, deficit %s", total_deficit)
            raise InfeasiblePlan(
                "Cannot meet minimum requirements: flexible categories have zero weight"
            )

        logger.info(
            "Raising %s to their minimums, deficit %s taken from %s",
            [c.label for c in under_minimum],
            total_deficit,
            [c.label for c in flexible],
        )

        for cat in under_minimum:
            allocations[cat] = self._minimums[cat]

        for cat in flexible:
            reduction = total_deficit * self._weights[cat] / total_flexible_weights
            allocations[cat] -= reduction
            if allocations[cat] < 0:
                logger.warning(
                    "%s would drop to %s after redistribution", cat.label, allocations[cat]
                )
                raise InfeasiblePlan(
                    "Cannot meet minimum requirements without negative allocation"
                )

        return total_deficit

    # ---------------------------------------------------------
    # Derived figures
    # ---------------------------------------------------------
    def per_day(self, category: Category) -> Decimal:
        return self._allocations[category] / self._trip_days

    def share(self, category: Category) -> Decimal:
        """Allocation as a percentage of the total budget."""
        return self._allocations[category] / self._total_budget * 100

    def report(self) -> str:
        return render_report(self)


def _check_category(category) -> None:
    if not isinstance(category, Category):
        raise InvalidArgument(f"Unknown category: {category!r}")


def build_plan(
    total_budget: Number,
    trip_days: int,
    minimums: Optional[Mapping[Category, Number]] = None,
    weights: Optional[Mapping[Category, Number]] = None,
) -> BudgetPlan:
    """Construct a plan and apply minimums/weights in category order."""
    minimums = minimums or {}
    weights = weights or {}

    unknown = [k for k in list(minimums) + list(weights) if not isinstance(k, Category)]
    if unknown:
        raise InvalidArgument(f"Unknown categories: {unknown!r}")

    plan = BudgetPlan(total_budget, trip_days)

    for cat in Category:
        if cat in minimums:
            plan.set_minimum(cat, minimums[cat])
    for cat in Category:
        if cat in weights:
            plan.set_weight(cat, weights[cat])

    return plan
