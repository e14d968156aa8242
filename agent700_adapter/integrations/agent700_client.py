# agent700_adapter/integrations/agent700_client.py

from __future__ import annotations
import logging
import os
from typing import Any, Dict, Optional, Protocol

import requests
from dotenv import load_dotenv

from agent700_adapter.core.errors import AuthenticationError, TransportError
from agent700_adapter.core.models import AppSession, Credential
from agent700_adapter.utils.helpers import normalize_base_url

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("AGENT700_BASE_URL", "https://api.agent700.ai")
APP_PASSWORD = os.getenv("AGENT700_APP_PASSWORD")
HTTP_TIMEOUT = float(os.getenv("AGENT700_HTTP_TIMEOUT", "30"))

LOGIN_PATH = "/api/auth/app-login"
LOGIN_HEADERS = {"Content-Type": "application/json", "User-Agent": "A700cli/1.0.0"}


class HttpTransport(Protocol):
    """
    What the adapter needs from an HTTP stack: send one request, hand back
    the decoded JSON, raise TransportError on network failure or non-2xx.
    """

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any: ...


class RequestsTransport:
    """
    Default transport on top of `requests`. No retries; the timeout comes
    from AGENT700_HTTP_TIMEOUT unless given explicitly.
    """

    def __init__(self, timeout: float = HTTP_TIMEOUT):
        self.timeout = timeout

    def request(self, method, url, headers=None, body=None):
        try:
            r = requests.request(method, url, headers=headers, json=body, timeout=self.timeout)
            r.raise_for_status()
        except requests.HTTPError as e:
            resp = e.response
            raise TransportError(
                f"{method} {url} failed with status {resp.status_code}",
                status_code=resp.status_code,
                body=_decode(resp),
            ) from e
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        return _decode(r)


def _decode(r: requests.Response) -> Any:
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


# ---------------------- credentials ----------------------

def default_credential(base_url: Optional[str] = None) -> Credential:
    """
    Credential built from the environment (.env supported).
    """
    if not APP_PASSWORD:
        raise ValueError("Missing AGENT700_APP_PASSWORD in .env file.")
    return Credential(base_url=base_url or DEFAULT_BASE_URL, secret=APP_PASSWORD)


def exchange(credential: Credential, transport: HttpTransport) -> AppSession:
    """
    Trade the app password for a bearer session with one POST to the login
    endpoint. Transport errors propagate untouched; nothing is retried.
    """
    if not credential.secret:
        raise AuthenticationError("App password is empty")

    base_url = normalize_base_url(credential.base_url)
    logger.info("Logging in to %s", base_url)
    res = transport.request(
        "POST",
        f"{base_url}{LOGIN_PATH}",
        headers=dict(LOGIN_HEADERS),
        body={"token": credential.secret},
    )

    access_token = res.get("accessToken") if isinstance(res, dict) else None
    if not access_token:
        raise AuthenticationError("App login did not return accessToken")

    logger.debug("Login succeeded for %s", base_url)
    return AppSession(base_url=base_url, access_token=access_token)


def check_credential(credential: Credential, transport: HttpTransport) -> bool:
    """
    Check that the app password is accepted. The session is thrown away.
    """
    exchange(credential, transport)
    return True


