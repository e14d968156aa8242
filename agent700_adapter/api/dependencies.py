# agent700_adapter/api/dependencies.py

from typing import Optional

from fastapi import HTTPException

from agent700_adapter.core.models import Credential, CredentialIn
from agent700_adapter.integrations.agent700_client import (
    DEFAULT_BASE_URL,
    HttpTransport,
    RequestsTransport,
    default_credential,
)


def get_transport() -> HttpTransport:
    """HTTP transport used for calls to Agent700 (overridden in tests)."""
    return RequestsTransport()


def resolve_credential(payload: Optional[CredentialIn]) -> Credential:
    """
    Credential from the request body, or from AGENT700_APP_PASSWORD when the
    body carries none.
    """
    if payload is None:
        try:
            return default_credential()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    return Credential(base_url=payload.base_url or DEFAULT_BASE_URL, secret=payload.app_password)
