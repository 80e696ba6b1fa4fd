# trip_budget/models.py

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple


class Category(Enum):
    """Fixed spending buckets of a trip, in prompt and report order."""

    ACCOMMODATION = "Accommodation"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    MISCELLANEOUS = "Miscellaneous"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class AllocationTrace:
    """What the last allocation run did on its way to the final split."""

    provisional: Mapping[Category, Decimal]
    under_minimum: Tuple[Category, ...]
    flexible: Tuple[Category, ...]
    total_deficit: Decimal
    redistributed: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "provisional": {c.label: v for c, v in self.provisional.items()},
            "under_minimum": [c.label for c in self.under_minimum],
            "flexible": [c.label for c in self.flexible],
            "total_deficit": self.total_deficit,
            "redistributed": self.redistributed,
        }


@dataclass(frozen=True)
class ReportRow:
    label: str
    total: Decimal
    per_day: Decimal
    percent: Decimal
    minimum: Optional[Decimal]
