"""Session state: accumulated transactions plus request status."""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple

from ..llm.models import AnalysisResult, Transaction
from ..utils.exceptions import InvalidTransitionError, RequestInFlightError


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


def merge_transactions(
    existing: Iterable[Transaction],
    incoming: Iterable[Transaction]
) -> Tuple[Transaction, ...]:
    """
    Append incoming transactions after existing ones, in arrival order.

    An incoming id that is already taken (by the session or earlier in the
    same batch) is re-keyed as "<id>-<n>" with the smallest free n >= 2.
    """
    merged = list(existing)
    taken = {txn.id for txn in merged}

    for txn in incoming:
        if txn.id in taken:
            n = 2
            while f"{txn.id}-{n}" in taken:
                n += 1
            txn = replace(txn, id=f"{txn.id}-{n}")
        taken.add(txn.id)
        merged.append(txn)

    return tuple(merged)


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of one user session; transitions return new snapshots."""
    transactions: Tuple[Transaction, ...] = ()
    status: RequestStatus = RequestStatus.IDLE
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status is RequestStatus.LOADING

    def submit(self) -> "SessionState":
        """Idle or Error -> Loading."""
        if self.is_loading:
            raise RequestInFlightError("An analysis is already in progress")
        return replace(self, status=RequestStatus.LOADING, error=None)

    def succeed(self, result: AnalysisResult) -> "SessionState":
        """Loading -> Idle, appending the batch."""
        self._require_loading("succeed")
        return replace(
            self,
            transactions=merge_transactions(self.transactions, result.transactions),
            status=RequestStatus.IDLE,
            error=None
        )

    def fail(self, message: str) -> "SessionState":
        """Loading -> Error(message); transactions unchanged."""
        self._require_loading("fail")
        return replace(self, status=RequestStatus.ERROR, error=message)

    def reset(self, confirmed: bool) -> "SessionState":
        """Idle or Error -> Idle with no transactions, once the user confirmed."""
        if self.is_loading:
            raise InvalidTransitionError("Cannot clear data while an analysis is in progress")
        if not confirmed:
            return self
        return SessionState()

    def _require_loading(self, transition: str) -> None:
        if not self.is_loading:
            raise InvalidTransitionError(f"Cannot {transition} from status '{self.status.value}'")
