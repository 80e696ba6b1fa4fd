# trip_budget/report.py
"""
Report rendering for an allocated plan.

|— Header (days, total budget)
|— One row per category: Total, Per Day, % Total, Min Req
|— TOTAL row
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List

import pandas as pd

from .config import (
    CATEGORY_COLUMN_WIDTH,
    CURRENCY_SYMBOL,
    RULE_WIDTH,
    VALUE_COLUMN_WIDTH,
)
from .models import Category, ReportRow

COLUMNS = ["Category", "Total", "Per Day", "% Total", "Min Req"]


def format_currency(value: Decimal) -> str:
    # Halves round away from zero
    cents = abs(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 and cents else ""
    return f"{sign}{CURRENCY_SYMBOL}{cents:,.2f}"


def format_percent(value: Decimal) -> str:
    tenths = value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{tenths:.1f}%"


def build_report_rows(plan) -> List[ReportRow]:
    rows = []
    for cat in Category:
        rows.append(
            ReportRow(
                label=cat.label,
                total=plan.allocations[cat],
                per_day=plan.per_day(cat),
                percent=plan.share(cat),
                minimum=plan.minimums[cat],
            )
        )

    total = sum((r.total for r in rows), Decimal("0"))
    rows.append(
        ReportRow(
            label="TOTAL",
            total=total,
            per_day=total / plan.trip_days,
            percent=total / plan.total_budget * 100,
            minimum=None,
        )
    )
    return rows


def _format_line(cells: List[str]) -> str:
    first, rest = cells[0], cells[1:]
    line = f"{first:<{CATEGORY_COLUMN_WIDTH}}"
    for cell in rest:
        line += f" {cell:>{VALUE_COLUMN_WIDTH}}"
    return line


def render_report(plan) -> str:
    lines = [
        f"Budget Allocation for {plan.trip_days} day trip "
        f"(Total: {format_currency(plan.total_budget)})",
        "=" * RULE_WIDTH,
        _format_line(COLUMNS),
        "-" * RULE_WIDTH,
    ]

    rows = build_report_rows(plan)
    body, total_row = rows[:-1], rows[-1]

    for row in body:
        lines.append(
            _format_line(
                [
                    row.label,
                    format_currency(row.total),
                    format_currency(row.per_day),
                    format_percent(row.percent),
                    format_currency(row.minimum),
                ]
            )
        )

    lines.append("-" * RULE_WIDTH)
    lines.append(
        _format_line(
            [
                total_row.label,
                format_currency(total_row.total),
                format_currency(total_row.per_day),
                format_percent(total_row.percent),
            ]
        )
    )
    return "\n".join(lines)


def report_dataframe(plan) -> pd.DataFrame:
    """Same rows as the text report, as floats, for table widgets."""
    records = []
    for row in build_report_rows(plan):
        records.append(
            {
                "Category": row.label,
                "Total": float(row.total),
                "Per Day": float(row.per_day),
                "% Total": float(row.percent),
                "Min Req": None if row.minimum is None else float(row.minimum),
            }
        )
    return pd.DataFrame(records, columns=COLUMNS)
