# agent700_adapter/workflows/batch_flow.py

from typing import List, Optional, Sequence

from agent700_adapter.agents.batch_executor import BatchExecutor
from agent700_adapter.core.models import BatchResult, Credential, FailureMode, WorkUnit
from agent700_adapter.integrations.agent700_client import HttpTransport


def run_batch(
    credential: Credential,
    units: Sequence[WorkUnit],
    continue_on_fail: bool = False,
    transport: Optional[HttpTransport] = None,
) -> List[BatchResult]:
    """
    Entry point for hosts. Picks the failure mode from the host's
    continue-on-fail flag and delegates to BatchExecutor, which:
      1) logs in once
      2) runs every unit in order
      3) records or escalates per-unit failures
    """
    mode = FailureMode.CONTINUE if continue_on_fail else FailureMode.FAIL_FAST
    return BatchExecutor(transport=transport, mode=mode).run(credential, units)
