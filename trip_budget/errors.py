# trip_budget/errors.py


class BudgetPlanError(Exception):
    """Base class for every failure raised by a budget plan."""


class InvalidArgument(BudgetPlanError, ValueError):
    """Out-of-range or malformed input to a plan (budget, days, minimum, weight)."""


class DegenerateWeights(InvalidArgument):
    """All weights are zero, so there is nothing to split the budget by."""


class InfeasiblePlan(BudgetPlanError):
    """Minimums cannot be funded in the single redistribution pass."""


class AllocationInconsistency(BudgetPlanError):
    """Allocations drifted away from the total budget beyond the tolerance."""
