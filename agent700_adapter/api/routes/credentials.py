# agent700_adapter/api/routes/credentials.py

from fastapi import APIRouter, Depends, HTTPException

from agent700_adapter.api.dependencies import get_transport, resolve_credential
from agent700_adapter.core.errors import AuthenticationError, TransportError
from agent700_adapter.core.models import CredentialIn
from agent700_adapter.integrations.agent700_client import HttpTransport, check_credential

router = APIRouter(prefix="/api/v1", tags=["v1"])


@router.post("/credentials/test")
def test_credentials(payload: CredentialIn, transport: HttpTransport = Depends(get_transport)):
    """
    Log in with the given app password and report whether it worked.
    The session token is not returned.
    """
    credential = resolve_credential(payload)
    try:
        check_credential(credential, transport)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    except TransportError as e:
        code = 401 if e.status_code in (401, 403) else 502
        raise HTTPException(status_code=code, detail=str(e)) from e
    return {"ok": True, "baseUrl": credential.base_url}
