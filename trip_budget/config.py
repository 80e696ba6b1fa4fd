# trip_budget/config.py

import os
from decimal import Decimal

# Values a fresh plan starts with for every category
DEFAULT_MINIMUM = Decimal("0")
DEFAULT_WEIGHT = Decimal("1")

# Allowed drift between the allocation sum and the total budget
ALLOCATION_TOLERANCE = Decimal("0.01")

# Report layout
CURRENCY_SYMBOL = "$"
CATEGORY_COLUMN_WIDTH = 15
VALUE_COLUMN_WIDTH = 10
RULE_WIDTH = 70

# Console adapter: how many times a bad answer is asked again
MAX_PROMPT_ATTEMPTS = 3

LOG_LEVEL = os.environ.get("TRIP_BUDGET_LOG_LEVEL", "WARNING")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
