# agent700_adapter/core/errors.py

from __future__ import annotations
from typing import Any, Optional


class Agent700Error(Exception):
    """Base class for every failure raised by the adapter."""


class AuthenticationError(Agent700Error):
    """
    The login call went through but no usable access token came back.
    Always aborts the batch: no unit can run without a session.
    """


class TransportError(Agent700Error):
    """
    Network failure or non-2xx answer from the remote API.
    The remote's own error body is kept as-is; we never interpret it.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnsupportedOperationError(Agent700Error):
    """No request template is registered for the (resource, operation) pair."""

    def __init__(self, resource: str, operation: str):
        super().__init__(f"Unsupported operation '{resource}:{operation}'")
        self.resource = resource
        self.operation = operation


class ValidationError(Agent700Error):
    """A required parameter is missing for the chosen operation."""

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.hint = hint


class BatchAbortedError(Agent700Error):
    """
    Fail-fast escalation of a single unit's error.

    Message layout:
        [Item <n>] <Resource>:<Operation> - <message>. How to solve: <hint>
    where <n> is 1-based.
    """

    def __init__(self, item_index: int, label: str, cause: Exception, hint: str):
        self.item_index = item_index
        self.label = label
        self.cause = cause
        self.hint = hint
        message = str(cause).rstrip(".")
        super().__init__(f"[Item {item_index + 1}] {label} - {message}. How to solve: {hint}")
