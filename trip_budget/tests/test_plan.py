# trip_budget/tests/test_plan.py

from decimal import Decimal

import pytest

import trip_budget.plan
from trip_budget.errors import (
    AllocationInconsistency,
    DegenerateWeights,
    InfeasiblePlan,
    InvalidArgument,
)
from trip_budget.models import Category
from trip_budget.plan import BudgetPlan, build_plan

CENT = Decimal("0.01")


def assert_close(actual, expected, tol=CENT):
    assert abs(Decimal(actual) - Decimal(expected)) <= tol, f"{actual} != {expected}"


def test_defaults():
    plan = BudgetPlan(1000, 5)
    assert plan.total_budget == Decimal("1000")
    assert plan.trip_days == 5
    assert all(v == 0 for v in plan.minimums.values())
    assert all(v == 1 for v in plan.weights.values())
    assert all(v == 0 for v in plan.allocations.values())
    assert not plan.is_allocated
    assert plan.trace is None


@pytest.mark.parametrize("budget, days", [(-5, 3), (0, 3), (100, 0), (100, -1)])
def test_construct_rejects_non_positive(budget, days):
    with pytest.raises(InvalidArgument):
        BudgetPlan(budget, days)


@pytest.mark.parametrize("days", [2.5, "3", True])
def test_construct_rejects_non_integer_days(days):
    with pytest.raises(InvalidArgument):
        BudgetPlan(100, days)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        BudgetPlan(-5, 1)


def test_setters_reject_negative():
    plan = BudgetPlan(1000, 5)
    with pytest.raises(InvalidArgument):
        plan.set_minimum(Category.FOOD, -1)
    with pytest.raises(InvalidArgument):
        plan.set_weight(Category.FOOD, Decimal("-0.5"))
    assert plan.minimums[Category.FOOD] == 0
    assert plan.weights[Category.FOOD] == 1


def test_setters_reject_unknown_category():
    plan = BudgetPlan(1000, 5)
    with pytest.raises(InvalidArgument):
        plan.set_minimum("Food", 10)


def test_float_inputs_keep_decimal_value():
    plan = BudgetPlan(99.9, 2)
    plan.set_weight(Category.FOOD, 0.1)
    assert plan.total_budget == Decimal("99.9")
    assert plan.weights[Category.FOOD] == Decimal("0.1")


def test_views_are_copies():
    plan = BudgetPlan(1000, 5)
    plan.minimums[Category.FOOD] = Decimal("999")
    assert plan.minimums[Category.FOOD] == 0


def test_trace_provisional_is_read_only():
    plan = BudgetPlan(1000, 5)
    plan.allocate()

    with pytest.raises(TypeError):
        plan.trace.provisional[Category.FOOD] = Decimal("0")
    assert plan.trace.provisional[Category.FOOD] == Decimal("250")



def test_equal_weights_split_evenly():
    plan = BudgetPlan(1000, 5)
    allocations = plan.allocate()

    for cat in Category:
        assert allocations[cat] == Decimal("250")
        assert plan.per_day(cat) == Decimal("50")
        assert plan.share(cat) == Decimal("25")
    assert plan.is_allocated
    assert not plan.trace.redistributed


def test_weighted_split_without_minimums():
    plan = build_plan(
        1000,
        4,
        weights={
            Category.ACCOMMODATION: 2,
            Category.TRANSPORTATION: 1,
            Category.FOOD: 1,
            Category.MISCELLANEOUS: 0,
        },
    )
    allocations = plan.allocate()

    assert allocations[Category.ACCOMMODATION] == Decimal("500")
    assert allocations[Category.TRANSPORTATION] == Decimal("250")
    assert allocations[Category.FOOD] == Decimal("250")
    assert allocations[Category.MISCELLANEOUS] == Decimal("0")


def test_uneven_weights_sum_to_budget():
    plan = build_plan(
        100,
        3,
        weights={
            Category.ACCOMMODATION: 3,
            Category.TRANSPORTATION: 3,
            Category.FOOD: 1,
            Category.MISCELLANEOUS: 0.5,
        },
    )
    allocations = plan.allocate()

    assert_close(sum(allocations.values()), 100)
    assert_close(allocations[Category.ACCOMMODATION], Decimal(100) * 3 / Decimal("7.5"))


def test_minimum_triggers_redistribution():
    plan = build_plan(1000, 5, minimums={Category.FOOD: 300})
    allocations = plan.allocate()

    assert allocations[Category.FOOD] == Decimal("300")
    for cat in (Category.ACCOMMODATION, Category.TRANSPORTATION, Category.MISCELLANEOUS):
        assert_close(allocations[cat], "233.33")
    assert_close(sum(allocations.values()), 1000)

    trace = plan.trace
    assert trace.redistributed
    assert trace.under_minimum == (Category.FOOD,)
    assert Category.FOOD not in trace.flexible
    assert trace.total_deficit == Decimal("50")
    assert trace.provisional[Category.FOOD] == Decimal("250")


def test_minimums_are_met_after_allocation():
    plan = build_plan(
        2000,
        7,
        minimums={Category.ACCOMMODATION: 900, Category.TRANSPORTATION: 300},
        weights={Category.ACCOMMODATION: 2, Category.FOOD: 3},
    )
    allocations = plan.allocate()

    for cat in Category:
        assert allocations[cat] >= plan.minimums[cat]
    assert_close(sum(allocations.values()), 2000)


def test_allocate_is_idempotent():
    plan = build_plan(1000, 5, minimums={Category.FOOD: 300})
    first = plan.allocate()
    second = plan.allocate()
    assert first == second


def test_minimum_equal_to_budget_leaves_others_at_zero():
    plan = build_plan(1000, 5, minimums={Category.ACCOMMODATION: 1000})
    allocations = plan.allocate()

    assert allocations[Category.ACCOMMODATION] == Decimal("1000")
    for cat in (Category.TRANSPORTATION, Category.FOOD, Category.MISCELLANEOUS):
        assert allocations[cat] == 0


def test_minimum_above_budget_is_infeasible():
    plan = build_plan(1000, 5, minimums={Category.ACCOMMODATION: "1000.01"})
    with pytest.raises(InfeasiblePlan):
        plan.allocate()


def test_every_category_under_minimum_is_infeasible():
    plan = build_plan(1000, 5, minimums={cat: 300 for cat in Category})
    with pytest.raises(InfeasiblePlan):
        plan.allocate()


def test_weightless_flexible_categories_are_infeasible():
    plan = build_plan(
        1000,
        5,
        minimums={Category.ACCOMMODATION: 2000},
        weights={
            Category.ACCOMMODATION: 1,
            Category.TRANSPORTATION: 0,
            Category.FOOD: 0,
            Category.MISCELLANEOUS: 0,
        },
    )
    with pytest.raises(InfeasiblePlan):
        plan.allocate()


def test_all_zero_weights_fail_fast():
    plan = build_plan(100, 2, weights={cat: 0 for cat in Category})
    with pytest.raises(DegenerateWeights):
        plan.allocate()
    assert not plan.is_allocated
    assert all(v == 0 for v in plan.allocations.values())


def test_failed_run_keeps_previous_allocation():
    plan = BudgetPlan(1000, 5)
    before = plan.allocate()

    plan.set_minimum(Category.FOOD, 5000)
    with pytest.raises(InfeasiblePlan):
        plan.allocate()

    assert plan.allocations == before
    assert not plan.trace.redistributed


def test_single_pass_does_not_cascade():
    # Accommodation starts above its floor, then the Food deficit pushes it under.
    plan = build_plan(
        1000,
        5,
        minimums={Category.FOOD: 300, Category.ACCOMMODATION: 240},
    )
    allocations = plan.allocate()

    assert allocations[Category.FOOD] == Decimal("300")
    assert allocations[Category.ACCOMMODATION] < Decimal("240")
    assert_close(allocations[Category.ACCOMMODATION], "233.33")


def test_build_plan_rejects_unknown_keys():
    with pytest.raises(InvalidArgument):
        build_plan(1000, 5, minimums={"Food": 10})


def test_trace_to_dict():
    plan = build_plan(1000, 5, minimums={Category.FOOD: 300})
    plan.allocate()

    d = plan.trace.to_dict()
    assert d["under_minimum"] == ["Food"]
    assert d["flexible"] == ["Accommodation", "Transportation", "Miscellaneous"]
    assert d["provisional"]["Food"] == Decimal("250")
    assert d["redistributed"] is True


def test_total_drift_is_reported_and_keeps_previous_result(monkeypatch):
    plan = BudgetPlan(1000, 5)
    before = plan.allocate()
    trace_before = plan.trace

    monkeypatch.setattr(trip_budget.plan, "ALLOCATION_TOLERANCE", Decimal("-1"))
    with pytest.raises(AllocationInconsistency):
        plan.allocate()

    assert plan.allocations == before
    assert plan.trace is trace_before


def test_infeasible_run_logs_no_redistribution(caplog):
    plan = build_plan(1000, 5, minimums={cat: 300 for cat in Category})

    with caplog.at_level("INFO", logger="trip_budget.plan"):
        with pytest.raises(InfeasiblePlan):
            plan.allocate()

    assert not any("Raising" in r.getMessage() for r in caplog.records)
    assert any("No flexible category" in r.getMessage() for r in caplog.records)


def test_redistribution_is_logged(caplog):
    plan = build_plan(1000, 5, minimums={Category.FOOD: 300})

    with caplog.at_level("INFO", logger="trip_budget.plan"):
        plan.allocate()

    assert any("Raising ['Food']" in r.getMessage() for r in caplog.records)
