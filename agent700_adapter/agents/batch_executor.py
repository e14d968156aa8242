# agent700_adapter/agents/batch_executor.py

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from agent700_adapter.agents.failure_isolator import FailureIsolator, UnitOutcome, UnitState
from agent700_adapter.core.errors import ValidationError
from agent700_adapter.core.models import (
    AppSession,
    BatchResult,
    Credential,
    FailureMode,
    ItemResult,
    UnitParameters,
    WorkUnit,
)
from agent700_adapter.core.operations import OperationSpec, resolve, shape_response
from agent700_adapter.integrations.agent700_client import (
    HttpTransport,
    RequestsTransport,
    exchange,
)
from agent700_adapter.utils.helpers import is_blank

logger = logging.getLogger(__name__)


def validate_params(spec: OperationSpec, params: UnitParameters) -> None:
    """
    Raise ValidationError for the first required parameter that is missing.
    Runs before any network call for the unit.
    """
    for req in spec.required:
        value = getattr(params, req.name)
        missing = is_blank(value) if req.trim else not value
        if missing:
            raise ValidationError(f"'{req.display}' is required", hint=req.hint)


class BatchExecutor:
    """
    Runs one batch of work units against the Agent700 API:
      1) exchange the app password for a session (once per batch)
      2) for each unit in order: resolve -> validate -> request -> shape
      3) hand each outcome to the FailureIsolator

    Units run strictly one after another; a unit's request finishes before
    the next unit starts.
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        mode: FailureMode = FailureMode.FAIL_FAST,
    ):
        self.transport = transport or RequestsTransport()
        self.mode = FailureMode(mode)

    def run(self, credential: Credential, units: Sequence[WorkUnit]) -> List[BatchResult]:
        # login errors are never isolated, whatever the mode
        session = exchange(credential, self.transport)

        isolator = FailureIsolator(self.mode)
        results: List[BatchResult] = []
        for index, unit in enumerate(units):
            outcome = self.run_unit(session, index, unit)
            results.extend(isolator.settle(index, unit, outcome))

        logger.info(
            "Batch done: %d unit(s), %d result(s), %d recorded failure(s)",
            len(units), len(results), isolator.recorded,
        )
        return results

    def run_unit(self, session: AppSession, index: int, unit: WorkUnit) -> UnitOutcome:
        state = UnitState.PENDING
        logger.debug("Item %d: %s", index + 1, unit.label)
        try:
            spec = resolve(unit.resource, unit.operation)

            state = UnitState.VALIDATING
            validate_params(spec, unit.params)

            state = UnitState.REQUESTING
            raw = self.transport.request(
                spec.method,
                session.url(spec.path(unit.params)),
                headers=session.auth_headers(),
                body=spec.body(unit.params),
            )

            state = UnitState.TRANSFORMING
            payloads = shape_response(spec.shape_for(unit.params), raw, unit.params)
        except Exception as e:
            return UnitOutcome(error=e, failed_in=state, state=UnitState.FAILED)

        return UnitOutcome(results=[ItemResult(data=p, item_index=index) for p in payloads])
