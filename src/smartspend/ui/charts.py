"""Chart and table builders for the dashboard."""
from typing import Callable, Iterable

import pandas as pd
import plotly.graph_objects as go

from ..llm.categories import CATEGORY_ICONS
from ..llm.models import AggregatedData, ExpenseSummary, Transaction

TRANSACTION_COLUMNS = ["Date", "Merchant", "Category", "Amount", "Description"]


def breakdown_chart(summaries: Iterable[ExpenseSummary], formatter: Callable = str):
    """
    Donut chart of spending by category.

    Refund-dominated categories (total <= 0) cannot be drawn as slices and
    are left out of the chart.
    """
    slices = [s for s in summaries if s.total > 0]

    fig = go.Figure(
        go.Pie(
            labels=[s.category.value for s in slices],
            values=[float(s.total) for s in slices],
            marker=dict(colors=[s.color for s in slices]),
            hole=0.6,
            sort=False,
            customdata=[formatter(s.total) for s in slices],
            hovertemplate="%{label}<br>%{customdata}<extra></extra>",
            textinfo="percent",
        )
    )
    fig.update_layout(showlegend=False, height=320, margin=dict(t=10, b=10, l=10, r=10))
    return fig


def summary_frame(aggregated: AggregatedData, formatter: Callable = str) -> pd.DataFrame:
    """Per-category rows for the breakdown list."""
    rows = [
        {
            "Category": f"{CATEGORY_ICONS[s.category]} {s.category.value}",
            "Transactions": s.count,
            "Total": formatter(s.total),
            "Share": f"{aggregated.share(s.category) * 100:.1f}%",
        }
        for s in aggregated.summaries
    ]
    return pd.DataFrame(rows, columns=["Category", "Transactions", "Total", "Share"])


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Transaction table in arrival order."""
    rows = [
        {
            "Date": txn.date,
            "Merchant": txn.merchant,
            "Category": txn.category.value,
            "Amount": float(txn.amount),
            "Description": txn.original_description,
        }
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
