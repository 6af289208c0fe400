"""Session state and control."""
from .state import RequestStatus, SessionState, merge_transactions
from .controller import SessionController, run_analysis, complete_analysis

__all__ = [
    "RequestStatus",
    "SessionState",
    "merge_transactions",
    "SessionController",
    "run_analysis",
    "complete_analysis",
]
