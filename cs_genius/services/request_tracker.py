"""
Per-contract request state.

Each external contract (extraction, audit, draft) has its own busy flag:

    idle -> requesting -> succeeded | failed

A second request of the same type while one is in flight is suppressed, not
queued. Different contract types never block each other. A terminal state
goes back to idle on the next explicit action (a new request or a reset).
"""

import logging
import threading
from contextlib import asynccontextmanager
from typing import Dict

from cs_genius.models.api_responses import ContractType, RequestState

logger = logging.getLogger(__name__)


class RequestInProgressError(Exception):
    """
    Raised when a contract is triggered while the same contract is busy.
    This is a client error (409) - the trigger should have been disabled.
    """

    def __init__(self, contract: ContractType):
        self.contract = contract
        super().__init__(f"A {contract.value} request is already in progress")


class RequestTracker:
    """Busy flags for the external contracts."""

    def __init__(self):
        self._lock = threading.Lock()
        self._states: Dict[ContractType, RequestState] = {
            contract: RequestState.IDLE for contract in ContractType
        }

    def state(self, contract: ContractType) -> RequestState:
        with self._lock:
            return self._states[contract]

    def snapshot(self) -> Dict[ContractType, RequestState]:
        with self._lock:
            return dict(self._states)

    def is_busy(self, contract: ContractType) -> bool:
        return self.state(contract) == RequestState.REQUESTING

    def try_begin(self, contract: ContractType) -> bool:
        """
        Move a contract to REQUESTING.

        Returns:
            False if the contract is already requesting (the call is suppressed)
        """
        with self._lock:
            if self._states[contract] == RequestState.REQUESTING:
                logger.info(f"Suppressed {contract.value} request: already in progress")
                return False
            self._states[contract] = RequestState.REQUESTING
            return True

    def finish(self, contract: ContractType, succeeded: bool) -> None:
        with self._lock:
            self._states[contract] = (
                RequestState.SUCCEEDED if succeeded else RequestState.FAILED
            )

    def reset(self, contract: ContractType) -> None:
        """Return a settled contract to IDLE. An in-flight request is left alone."""
        with self._lock:
            if self._states[contract] != RequestState.REQUESTING:
                self._states[contract] = RequestState.IDLE

    @asynccontextmanager
    async def track(self, contract: ContractType):
        """
        Guard one contract call.

        Yields a CallOutcome; the call counts as failed if the block raises
        or calls `outcome.mark_failed()`.

        Raises:
            RequestInProgressError: If the same contract is already in flight
        """
        if not self.try_begin(contract):
            raise RequestInProgressError(contract)

        outcome = CallOutcome()
        try:
            yield outcome
        except BaseException:
            outcome.mark_failed()
            raise
        finally:
            self.finish(contract, not outcome.failed)
            logger.debug(
                f"{contract.value} request settled: "
                f"{'failed' if outcome.failed else 'succeeded'}"
            )


class CallOutcome:
    """Result flag for a tracked call."""

    def __init__(self):
        self.failed = False

    def mark_failed(self) -> None:
        self.failed = True
