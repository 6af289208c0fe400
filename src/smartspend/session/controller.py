"""Drives analyze/reset cycles for one user session."""
import uuid
from typing import Optional

from .state import SessionState
from ..llm.aggregator import Aggregator
from ..llm.analyzer import StatementAnalyzer
from ..llm.inputs import StatementInput, is_missing
from ..llm.models import AggregatedData
from ..utils.logger import get_logger, set_session_context
from ..utils.exceptions import AnalysisFailure, DEFAULT_FAILURE_MESSAGE, RequestInFlightError

logger = get_logger()


async def complete_analysis(
    loading: SessionState,
    analyzer: StatementAnalyzer,
    statement: StatementInput
) -> SessionState:
    """Run the service request for a Loading state and return the settled state."""
    try:
        result = await analyzer.analyze(statement)
    except AnalysisFailure as e:
        return loading.fail(e.user_message)
    except Exception:
        logger.exception("Unexpected error during statement analysis")
        return loading.fail(DEFAULT_FAILURE_MESSAGE)
    return loading.succeed(result)


async def run_analysis(
    state: SessionState,
    analyzer: StatementAnalyzer,
    statement: Optional[StatementInput]
) -> SessionState:
    """
    Take a session state through one analyze cycle.

    Missing input leaves the state untouched. Raises RequestInFlightError
    when the state is already loading.
    """
    if is_missing(statement):
        return state
    return await complete_analysis(state.submit(), analyzer, statement)


class SessionController:
    """Owns the state of one session and the collaborators that change it."""

    def __init__(self, analyzer: StatementAnalyzer, aggregator: Optional[Aggregator] = None,
                 session_id: Optional[str] = None):
        self.analyzer = analyzer
        self.aggregator = aggregator or Aggregator()
        self.session_id = session_id or uuid.uuid4().hex[:8]
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    async def analyze(self, statement: Optional[StatementInput]) -> SessionState:
        """Analyze one statement and merge the results into the session."""
        set_session_context(self.session_id)

        if is_missing(statement):
            logger.debug("Analyze requested without input, ignoring")
            return self._state

        try:
            loading = self._state.submit()
        except RequestInFlightError:
            logger.warning("Analyze requested while a request is in flight, rejecting")
            return self._state

        previous = self._state
        self._state = loading
        logger.info(f"Analyzing {type(statement).__name__}")

        try:
            self._state = await complete_analysis(loading, self.analyzer, statement)
        except BaseException:
            # Cancelled or interrupted, so no settled state was produced
            self._state = previous
            logger.warning("Analysis interrupted, session restored")
            raise

        if self._state.error:
            logger.warning(f"Analysis failed: {self._state.error}")
        else:
            logger.info(f"Session now holds {len(self._state.transactions)} transactions")
        return self._state

    def reset(self, confirmed: bool) -> SessionState:
        """Clear all transactions once the user confirmed."""
        set_session_context(self.session_id)
        self._state = self._state.reset(confirmed)
        if confirmed:
            logger.info("Session data cleared")
        return self._state

    def aggregate(self) -> AggregatedData:
        return self.aggregator.aggregate(list(self._state.transactions))
