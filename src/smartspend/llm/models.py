"""Data models for statement analysis."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Tuple

from .categories import Category


@dataclass(frozen=True)
class Transaction:
    """Transaction data."""
    id: str
    date: str  # ISO YYYY-MM-DD or ""
    merchant: str
    amount: Decimal  # positive = expense, negative = refund
    category: Category
    original_description: str = ""

    def to_dict(self) -> Dict:
        """Wire representation (camelCase keys, amount as float)."""
        return {
            "id": self.id,
            "date": self.date,
            "merchant": self.merchant,
            "amount": float(self.amount),
            "category": self.category.value,
            "originalDescription": self.original_description,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Structured result of one statement analysis."""
    transactions: Tuple[Transaction, ...]
    total_amount: Decimal
    currency: str


@dataclass(frozen=True)
class ExpenseSummary:
    """Per-category totals derived from a transaction list."""
    category: Category
    total: Decimal
    count: int
    color: str


@dataclass
class AggregatedData:
    """Aggregated transaction data."""
    summaries: List[ExpenseSummary] = field(default_factory=list)
    grand_total: Decimal = Decimal("0")
    transaction_count: int = 0

    def share(self, category: Category) -> float:
        """Proportion of the grand total spent in a category (0 when unknown)."""
        if not self.grand_total:
            return 0.0
        for summary in self.summaries:
            if summary.category == category:
                return float(summary.total / self.grand_total)
        return 0.0
