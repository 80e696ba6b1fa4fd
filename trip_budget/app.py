import sys
import os

# Folder of this file and the repo root above it
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)

# Parent dir on sys.path so 'trip_budget' imports when run via `streamlit run`
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

# app.py
# Trip Budget Splitter — Streamlit page

import streamlit as st
import plotly.express as px

from trip_budget.budget_visualizer import AllocationVisualizer
from trip_budget.config import DEFAULT_MINIMUM, DEFAULT_WEIGHT
from trip_budget.errors import BudgetPlanError
from trip_budget.models import Category
from trip_budget.plan import build_plan
from trip_budget.report import format_currency, report_dataframe

# ============================================================
# PAGE CONFIG
# ============================================================
st.set_page_config(page_title="Trip Budget Splitter", page_icon="🧳", layout="centered")
st.title("🧳 Trip Budget Splitter")

# - plan: last successfully allocated BudgetPlan or None
if "plan" not in st.session_state:
    st.session_state["plan"] = None


# ============================================================
# INPUT FORM
# ============================================================
with st.form("budget_form"):
    total_budget = st.number_input("Total budget", min_value=0.0, value=1000.0, step=50.0)
    trip_days = st.number_input("Trip duration (days)", min_value=1, value=5, step=1)

    minimums = {}
    weights = {}
    st.markdown("**Minimum requirements and priority weights**")
    for cat in Category:
        col1, col2 = st.columns(2)
        with col1:
            minimums[cat] = st.number_input(
                f"Minimum for {cat.label}",
                min_value=0.0,
                value=float(DEFAULT_MINIMUM),
                key=f"min_{cat.name}",
            )
        with col2:
            weights[cat] = st.number_input(
                f"Weight for {cat.label}",
                min_value=0.0,
                value=float(DEFAULT_WEIGHT),
                key=f"weight_{cat.name}",
            )

    submitted = st.form_submit_button("Allocate")

if submitted:
    try:
        plan = build_plan(total_budget, int(trip_days), minimums, weights)
        plan.allocate()
    except BudgetPlanError as exc:
        st.session_state["plan"] = None
        st.error(f"⚠️ {exc}")
    else:
        st.session_state["plan"] = plan
        st.success("Budget allocated!")


# ============================================================
# RESULT PANEL
# ============================================================
plan = st.session_state.get("plan")

if plan is not None:
    st.markdown(
        f"## 📊 Allocation for {plan.trip_days} day trip "
        f"(Total: {format_currency(plan.total_budget)})"
    )

    df = report_dataframe(plan)
    st.dataframe(
        df.style.format(
            {"Total": "{:,.2f}", "Per Day": "{:,.2f}", "% Total": "{:.1f}%", "Min Req": "{:,.2f}"},
            na_rep="",
        )
    )

    st.subheader("📅 Per Day")
    cols = st.columns(len(Category))
    for col, cat in zip(cols, Category):
        with col:
            st.metric(cat.label, format_currency(plan.per_day(cat)))

    if plan.trace.redistributed:
        lifted = ", ".join(c.label for c in plan.trace.under_minimum)
        st.info(
            f"Raised to minimum: {lifted}. "
            f"{format_currency(plan.trace.total_deficit)} taken from the other categories."
        )

    st.subheader("🥧 Final Budget Distribution")
    df_chart = df[(df["Category"] != "TOTAL") & (df["Total"] > 0)]
    fig_pie = px.pie(df_chart, values="Total", names="Category", hole=0.4)
    fig_pie.update_traces(textposition="inside", textinfo="percent+label")
    fig_pie.update_layout(showlegend=False, margin=dict(t=40, b=0, l=0, r=0))
    st.plotly_chart(fig_pie, use_container_width=True)

    st.subheader("⚖️ Weighted Split vs Final")
    st.pyplot(AllocationVisualizer(plan).plot_provisional_vs_final())
