# agent700_adapter/agents/failure_isolator.py

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from agent700_adapter.core.errors import (
    BatchAbortedError,
    UnsupportedOperationError,
    ValidationError,
)
from agent700_adapter.core.models import (
    BatchResult,
    ErrorResult,
    FailureMode,
    ItemResult,
    WorkUnit,
)
from agent700_adapter.core.operations import RESOURCE_HINTS, UNSUPPORTED_HINT

logger = logging.getLogger(__name__)


class UnitState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    TRANSFORMING = "transforming"
    DONE = "done"
    FAILED = "failed"
    RECORDED = "recorded"


@dataclass
class UnitOutcome:
    """
    Ok/Err of one unit. `state` ends at DONE on success and FAILED on error,
    with `failed_in` naming the step that raised. The isolator moves a
    recorded failure on to RECORDED.
    """
    results: List[ItemResult] = field(default_factory=list)
    error: Optional[Exception] = None
    failed_in: Optional[UnitState] = None
    state: UnitState = UnitState.DONE

    @property
    def ok(self) -> bool:
        return self.error is None


def remediation_hint(unit: WorkUnit, error: Exception) -> str:
    if isinstance(error, ValidationError) and error.hint:
        return error.hint
    if isinstance(error, UnsupportedOperationError):
        return UNSUPPORTED_HINT
    return RESOURCE_HINTS.get(unit.resource, UNSUPPORTED_HINT)


class FailureIsolator:
    """
    Decides what a failed unit means for the batch:
      - fail-fast: raise BatchAbortedError (item number, label, message, hint)
      - continue:  record an ErrorResult and let the loop move on
    """

    def __init__(self, mode: FailureMode = FailureMode.FAIL_FAST):
        self.mode = FailureMode(mode)
        self.recorded = 0

    def settle(self, index: int, unit: WorkUnit, outcome: UnitOutcome) -> List[BatchResult]:
        if outcome.ok:
            return list(outcome.results)

        error = outcome.error
        if self.mode is FailureMode.CONTINUE:
            logger.warning(
                "Item %d (%s) failed while %s: %s",
                index + 1, unit.label, outcome.failed_in.value if outcome.failed_in else "running", error,
            )
            self.recorded += 1
            outcome.state = UnitState.RECORDED
            return [ErrorResult(error=str(error), item_index=index, operation=unit.operation)]

        aborted = BatchAbortedError(index, unit.label, error, remediation_hint(unit, error))
        logger.error("Batch aborted: %s", aborted)
        raise aborted from error
