"""Transaction aggregation module."""
from decimal import Decimal
from collections import defaultdict
from typing import Iterable, List

from .categories import CATEGORY_COLORS, CATEGORY_ORDER, FALLBACK_COLOR
from .models import Transaction, ExpenseSummary, AggregatedData
from ..utils.logger import get_logger

logger = get_logger()


class Aggregator:
    """Aggregates transactions by category."""

    def summarize(self, transactions: Iterable[Transaction]) -> List[ExpenseSummary]:
        """
        Group transactions by category.

        Args:
            transactions: Transactions in arrival order

        Returns:
            One summary per category that occurs, sorted by total descending;
            equal totals keep category enumeration order.
        """
        totals = defaultdict(Decimal)
        counts = defaultdict(int)
        for txn in transactions:
            totals[txn.category] += txn.amount
            counts[txn.category] += 1

        summaries = [
            ExpenseSummary(
                category=category,
                total=total,
                count=counts[category],
                color=CATEGORY_COLORS.get(category, FALLBACK_COLOR)
            )
            for category, total in totals.items()
        ]
        summaries.sort(key=lambda s: (-s.total, CATEGORY_ORDER[s.category]))
        return summaries

    @staticmethod
    def grand_total(transactions: Iterable[Transaction]) -> Decimal:
        """Sum of all amounts, independent of category."""
        return sum((txn.amount for txn in transactions), Decimal("0"))

    def aggregate(self, transactions: List[Transaction]) -> AggregatedData:
        """
        Aggregate transactions into per-category summaries and a grand total.

        Args:
            transactions: List of transactions (may be empty)

        Returns:
            AggregatedData object
        """
        summaries = self.summarize(transactions)
        grand_total = self.grand_total(transactions)

        logger.debug(
            f"Aggregated {len(transactions)} transactions into {len(summaries)} categories, "
            f"total {grand_total}"
        )

        return AggregatedData(
            summaries=summaries,
            grand_total=grand_total,
            transaction_count=len(transactions)
        )
