"""LLM processing module."""
from .categories import Category, CATEGORY_COLORS, CATEGORY_ICONS
from .models import Transaction, AnalysisResult, ExpenseSummary, AggregatedData
from .inputs import TextStatement, ImageStatement, StatementInput, load_statement
from .analyzer import StatementAnalyzer
from .aggregator import Aggregator

__all__ = [
    "Category",
    "CATEGORY_COLORS",
    "CATEGORY_ICONS",
    "Transaction",
    "AnalysisResult",
    "ExpenseSummary",
    "AggregatedData",
    "TextStatement",
    "ImageStatement",
    "StatementInput",
    "load_statement",
    "StatementAnalyzer",
    "Aggregator",
]
