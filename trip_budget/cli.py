# trip_budget/cli.py
"""
Console front end: asks for the budget, trip length, minimums and weights,
then prints the allocation report.
"""

import argparse
import logging
from decimal import Decimal
from typing import Callable, Optional, Sequence

from .config import LOG_FORMAT, LOG_LEVEL, LOG_LEVELS, MAX_PROMPT_ATTEMPTS
from .errors import BudgetPlanError, InvalidArgument
from .models import Category
from .plan import BudgetPlan
from .utils import parse_days, to_decimal

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def ask(read: Reader, write: Writer, prompt: str, accept: Callable[[str], object]):
    """
    Ask until accept() takes the answer without raising InvalidArgument.
    Gives up after MAX_PROMPT_ATTEMPTS answers.
    """
    for attempt in range(1, MAX_PROMPT_ATTEMPTS + 1):
        answer = read(prompt)
        try:
            return accept(answer)
        except InvalidArgument as exc:
            logger.debug("Rejected answer %r (attempt %d): %s", answer, attempt, exc)
            write(f"Invalid input: {exc}")

    raise InvalidArgument(f"No valid answer after {MAX_PROMPT_ATTEMPTS} attempts")


def collect_plan(read: Reader = input, write: Writer = print) -> BudgetPlan:
    write("Travel Budget Planner")

    budget = ask(read, write, "Enter total budget: ", _positive_budget)

    def make_plan(days_text):
        return BudgetPlan(budget, parse_days(days_text))

    plan = ask(read, write, "Enter trip duration (days): ", make_plan)

    write("\nSet minimum requirements (enter 0 if none):")
    for cat in Category:
        ask(
            read,
            write,
            f"Minimum for {cat.label}: ",
            lambda text, cat=cat: plan.set_minimum(cat, text),
        )

    write("\nSet priority weights (higher = more important):")
    running = Decimal("0")
    for cat in Category:
        ask(
            read,
            write,
            f"Weight for {cat.label} (current total = {running}): ",
            lambda text, cat=cat: plan.set_weight(cat, text),
        )
        running += plan.weights[cat]

    return plan


def _positive_budget(text: str):
    value = to_decimal(text, "total budget")
    if value <= 0:
        raise InvalidArgument("Budget must be positive")
    return value


def main(
    argv: Optional[Sequence[str]] = None,
    read: Reader = input,
    write: Writer = print,
) -> int:
    parser = argparse.ArgumentParser(
        prog="trip-budget", description="Split a trip budget across spending categories."
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        plan = collect_plan(read, write)
        plan.allocate()
    except BudgetPlanError as exc:
        logger.error("Budget allocation failed: %s", exc)
        write(f"Error: {exc}")
        return 1
    except EOFError:
        write("Input ended before the plan was complete.")
        return 1

    write("")
    write(plan.report())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
