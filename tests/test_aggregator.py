"""Tests for transaction aggregator."""
import random
import unittest
from decimal import Decimal

from smartspend.llm.aggregator import Aggregator
from smartspend.llm.categories import Category, CATEGORY_COLORS

from fakes import txn


class TestAggregator(unittest.TestCase):
    """Test Aggregator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.aggregator = Aggregator()

    def test_aggregate_transactions(self):
        """Food and shopping example from a three-line statement."""
        transactions = [
            txn("1", 500, Category.FOOD, "Swiggy"),
            txn("2", 1200, Category.SHOPPING, "Myntra"),
            txn("3", 300, Category.FOOD, "Zomato"),
        ]

        result = self.aggregator.aggregate(transactions)

        self.assertEqual(len(result.summaries), 2)
        shopping, food = result.summaries
        self.assertEqual(shopping.category, Category.SHOPPING)
        self.assertEqual(shopping.total, Decimal("1200"))
        self.assertEqual(shopping.count, 1)
        self.assertEqual(shopping.color, CATEGORY_COLORS[Category.SHOPPING])
        self.assertEqual(food.category, Category.FOOD)
        self.assertEqual(food.total, Decimal("800"))
        self.assertEqual(food.count, 2)
        self.assertEqual(result.grand_total, Decimal("2000"))
        self.assertEqual(result.transaction_count, 3)

    def test_empty_transactions(self):
        result = self.aggregator.aggregate([])

        self.assertEqual(result.summaries, [])
        self.assertEqual(result.grand_total, Decimal("0"))
        self.assertEqual(result.share(Category.FOOD), 0.0)

    def test_refund_reduces_category_total(self):
        transactions = [
            txn("1", 999, Category.SHOPPING, "Amazon"),
            txn("2", -499, Category.SHOPPING, "Amazon refund"),
        ]

        summaries = self.aggregator.summarize(transactions)

        self.assertEqual(summaries[0].total, Decimal("500"))
        self.assertEqual(summaries[0].count, 2)

    def test_ties_follow_category_order(self):
        transactions = [
            txn("1", 100, Category.MISC),
            txn("2", 100, Category.HOUSING),
            txn("3", 100, Category.FOOD),
        ]

        summaries = self.aggregator.summarize(transactions)

        self.assertEqual(
            [s.category for s in summaries],
            [Category.FOOD, Category.HOUSING, Category.MISC]
        )

    def test_share(self):
        transactions = [
            txn("1", 750, Category.UTILITIES),
            txn("2", 250, Category.ENTERTAINMENT),
        ]

        result = self.aggregator.aggregate(transactions)

        self.assertAlmostEqual(result.share(Category.UTILITIES), 0.75)
        self.assertAlmostEqual(result.share(Category.ENTERTAINMENT), 0.25)
        self.assertEqual(result.share(Category.HEALTH), 0.0)

    def test_random_lists_conserve_totals_and_order(self):
        """Totals and counts are conserved and output is sorted, for many lists."""
        rng = random.Random(20240315)
        categories = list(Category)

        for _ in range(200):
            transactions = [
                txn(
                    str(i),
                    Decimal(rng.randint(-50000, 500000)) / 100,
                    rng.choice(categories)
                )
                for i in range(rng.randint(0, 40))
            ]

            summaries = self.aggregator.summarize(transactions)

            self.assertEqual(
                sum((s.total for s in summaries), Decimal("0")),
                self.aggregator.grand_total(transactions)
            )
            self.assertEqual(sum(s.count for s in summaries), len(transactions))
            self.assertEqual(len({s.category for s in summaries}), len(summaries))
            for a, b in zip(summaries, summaries[1:]):
                self.assertGreaterEqual(a.total, b.total)


if __name__ == "__main__":
    unittest.main()
