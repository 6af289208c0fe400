"""Tests for the session controller and analyze cycle."""
import asyncio
import unittest
from decimal import Decimal

from smartspend.llm.analyzer import StatementAnalyzer
from smartspend.llm.categories import Category
from smartspend.llm.inputs import ImageStatement, TextStatement
from smartspend.session.controller import SessionController, run_analysis
from smartspend.session.state import RequestStatus, SessionState
from smartspend.utils.exceptions import AnalysisFailure, DEFAULT_FAILURE_MESSAGE, RequestInFlightError

from fakes import FakeAnalyzer, FakeClient, item, make_settings, payload, result_of, txn


class TestSessionController(unittest.IsolatedAsyncioTestCase):
    """Test SessionController functionality."""

    async def test_consecutive_batches_accumulate_in_order(self):
        t1 = (txn("a", 500, Category.FOOD), txn("b", 1200, Category.SHOPPING))
        t2 = (txn("c", 300, Category.FOOD),)
        controller = SessionController(FakeAnalyzer(result_of(*t1), result_of(*t2)))

        await controller.analyze(TextStatement("first"))
        state = await controller.analyze(TextStatement("second"))

        self.assertEqual(state.status, RequestStatus.IDLE)
        self.assertEqual(state.transactions, t1 + t2)

        aggregated = controller.aggregate()
        self.assertEqual(aggregated.grand_total, Decimal("2000"))
        self.assertEqual(
            [(s.category, s.total, s.count) for s in aggregated.summaries],
            [(Category.SHOPPING, Decimal("1200"), 1), (Category.FOOD, Decimal("800"), 2)]
        )

    async def test_failure_leaves_transactions_unchanged(self):
        controller = SessionController(FakeAnalyzer(
            result_of(txn("a", 100)),
            AnalysisFailure("Failed to analyze statement. Please ensure the input is clear.")
        ))
        await controller.analyze(TextStatement("first"))
        before = controller.state.transactions

        state = await controller.analyze(TextStatement("blurry"))

        self.assertEqual(state.status, RequestStatus.ERROR)
        self.assertEqual(state.error, "Failed to analyze statement. Please ensure the input is clear.")
        self.assertEqual(state.transactions, before)

    async def test_success_after_failure_clears_error(self):
        controller = SessionController(FakeAnalyzer(AnalysisFailure("nope"), result_of(txn("a", 1))))

        await controller.analyze(TextStatement("first"))
        state = await controller.analyze(TextStatement("second"))

        self.assertIsNone(state.error)
        self.assertEqual(len(state.transactions), 1)

    async def test_unexpected_error_becomes_failure(self):
        controller = SessionController(FakeAnalyzer(KeyError("surprise")))

        state = await controller.analyze(TextStatement("text"))

        self.assertEqual(state.status, RequestStatus.ERROR)
        self.assertEqual(state.error, DEFAULT_FAILURE_MESSAGE)

    async def test_missing_input_is_ignored(self):
        analyzer = FakeAnalyzer()
        controller = SessionController(analyzer)

        for statement in (None, TextStatement("   \n"), ImageStatement("", "image/png")):
            state = await controller.analyze(statement)
            self.assertEqual(state, SessionState())

        self.assertEqual(analyzer.calls, [])

    async def test_submit_while_loading_is_rejected(self):
        release = asyncio.Event()

        async def slow_result():
            await release.wait()
            return result_of(txn("a", 100))

        analyzer = FakeAnalyzer(slow_result)
        controller = SessionController(analyzer)

        first = asyncio.create_task(controller.analyze(TextStatement("first")))
        await asyncio.sleep(0)
        self.assertTrue(controller.state.is_loading)

        rejected = await controller.analyze(TextStatement("second"))
        self.assertTrue(rejected.is_loading)
        self.assertEqual(len(analyzer.calls), 1)

        release.set()
        final = await first
        self.assertEqual([t.id for t in final.transactions], ["a"])

    async def test_cancelled_request_restores_state(self):
        async def never_finishes():
            await asyncio.Event().wait()

        analyzer = FakeAnalyzer(result_of(txn("a", 100)), never_finishes, result_of(txn("b", 50)))
        controller = SessionController(analyzer)
        await controller.analyze(TextStatement("first"))
        before = controller.state

        task = asyncio.create_task(controller.analyze(TextStatement("second")))
        await asyncio.sleep(0)
        self.assertTrue(controller.state.is_loading)

        task.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await task

        self.assertFalse(controller.state.is_loading)
        self.assertEqual(controller.state, before)

        state = await controller.analyze(TextStatement("third"))
        self.assertEqual([t.id for t in state.transactions], ["a", "b"])

    async def test_reset(self):
        controller = SessionController(FakeAnalyzer(result_of(txn("a", 1), txn("b", 2))))
        await controller.analyze(TextStatement("text"))

        controller.reset(confirmed=False)
        self.assertEqual(len(controller.state.transactions), 2)

        state = controller.reset(confirmed=True)
        self.assertEqual(len(state.transactions), 0)
        self.assertEqual(controller.aggregate().summaries, [])

    async def test_malformed_response_end_to_end(self):
        client = FakeClient(
            payload(item("t1", "Swiggy", 450, "Food & Dining")),
            '{"transactions": [{"id": "t9", "merchant": "???"}]}'
        )
        analyzer = StatementAnalyzer("test_key", make_settings(), client=client)
        controller = SessionController(analyzer)

        await controller.analyze(TextStatement("SWIGGY 450"))
        state = await controller.analyze(TextStatement("garbled"))

        self.assertEqual(state.status, RequestStatus.ERROR)
        self.assertEqual([t.id for t in state.transactions], ["t1"])


class TestRunAnalysis(unittest.IsolatedAsyncioTestCase):
    """Test the state-in, state-out analyze function."""

    async def test_returns_next_state(self):
        state = SessionState(transactions=(txn("a", 1),))

        next_state = await run_analysis(state, FakeAnalyzer(result_of(txn("b", 2))), TextStatement("x"))

        self.assertEqual([t.id for t in next_state.transactions], ["a", "b"])
        self.assertEqual([t.id for t in state.transactions], ["a"])

    async def test_missing_input_returns_same_state(self):
        state = SessionState()

        self.assertIs(await run_analysis(state, FakeAnalyzer(), None), state)

    async def test_loading_state_is_rejected(self):
        with self.assertRaises(RequestInFlightError):
            await run_analysis(SessionState().submit(), FakeAnalyzer(), TextStatement("x"))


if __name__ == "__main__":
    unittest.main()
