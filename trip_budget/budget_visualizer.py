# trip_budget/budget_visualizer.py
# Visualization module for Final Pie and Provisional-vs-Final Comparison

import matplotlib.pyplot as plt
import numpy as np

from .errors import InvalidArgument
from .models import Category


class AllocationVisualizer:
    """
    Generates:
    |— Visualization Panel
    |     |— Final Pie
    |     |— Provisional vs Final Comparison (Bar Chart)

    Output: Matplotlib figures (can be rendered inside Streamlit or saved)
    """

    def __init__(self, plan):
        if not plan.is_allocated:
            raise InvalidArgument("Plan has not been allocated yet")
        self.plan = plan
        self.provisional = {c.label: float(v) for c, v in plan.trace.provisional.items()}
        self.final = {c.label: float(v) for c, v in plan.allocations.items()}

    # ---------------------------------------------------------
    # Final Pie Chart
    # ---------------------------------------------------------
    def plot_final_pie(self):
        shown = {label: amount for label, amount in self.final.items() if amount > 0}

        fig, ax = plt.subplots(figsize=(6, 6))
        ax.pie(list(shown.values()), labels=list(shown.keys()), autopct="%1.1f%%")
        ax.set_title(f"Trip Budget Distribution ({self.plan.trip_days} days)")
        return fig

    # ---------------------------------------------------------
    # Provisional/Final Comparison (Bar Chart)
    # ---------------------------------------------------------
    def plot_provisional_vs_final(self):
        labels = [c.label for c in Category]
        before = [self.provisional[label] for label in labels]
        after = [self.final[label] for label in labels]

        x = np.arange(len(labels))

        fig, ax = plt.subplots(figsize=(10, 5))
        ax.bar(x, before, width=0.4, label="Weighted split")
        ax.bar(x + 0.4, after, width=0.4, label="Final")

        minimums = [float(self.plan.minimums[c]) for c in Category]
        ax.scatter(x + 0.4, minimums, marker="_", s=400, color="black", label="Minimum")

        ax.set_xticks(x + 0.2)
        ax.set_xticklabels(labels, rotation=45)
        ax.set_title("Weighted Split vs Final Allocation")
        ax.legend()

        return fig


# End of file
