# agent700_adapter/api/routes/execute.py

from fastapi import APIRouter, Depends, HTTPException

from agent700_adapter.api.dependencies import get_transport, resolve_credential
from agent700_adapter.core.errors import AuthenticationError, BatchAbortedError, TransportError
from agent700_adapter.core.models import ExecuteRequest, ExecuteResponse
from agent700_adapter.integrations.agent700_client import HttpTransport
from agent700_adapter.workflows.batch_flow import run_batch

router = APIRouter(prefix="/api/v1", tags=["v1"])


@router.post("/execute", response_model=ExecuteResponse)
def execute(req: ExecuteRequest, transport: HttpTransport = Depends(get_transport)):
    """
    Run one batch:
      - log in once with the app password
      - run every unit in order
      - continueOnFail=true records unit errors as results,
        otherwise the first unit error aborts with 422
    """
    credential = resolve_credential(req.credential)

    try:
        results = run_batch(credential, req.units, req.continue_on_fail, transport=transport)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    except BatchAbortedError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "itemIndex": e.item_index, "operation": e.label},
        ) from e
    except TransportError as e:
        # only the login call can get here; unit errors arrive as BatchAbortedError
        raise HTTPException(status_code=502, detail=str(e)) from e

    return ExecuteResponse(results=[r.model_dump(by_alias=True) for r in results])
