# agent700_adapter/core/operations.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional, Tuple

from agent700_adapter.core.errors import UnsupportedOperationError
from agent700_adapter.core.models import UnitParameters
from agent700_adapter.utils.helpers import encode_path_segment, is_empty

ALIGNMENT_DATA = "/api/alignment-data"


class ResponseShape(str, Enum):
    PASSTHROUGH = "passthrough"
    FAN_OUT_ARRAY = "fan-out-array"
    SIMPLIFY_CHAT = "simplify-chat"
    WRAP_DELETED = "wrap-deleted"
    WRAP_PATTERN_RESULT = "wrap-pattern-result"


@dataclass(frozen=True)
class RequiredParam:
    name: str          # attribute on UnitParameters
    display: str       # how the user knows the field
    hint: str
    trim: bool = False


@dataclass(frozen=True)
class OperationSpec:
    """
    Request template for one (resource, operation) pair.

    `path` and `body` are pure functions of the unit's parameters; `body`
    returns None for bodiless verbs.
    """
    resource: str
    operation: str
    name: str
    action: str
    method: str
    path: Callable[[UnitParameters], str]
    response_shape: ResponseShape
    body: Callable[[UnitParameters], Optional[Dict[str, Any]]] = lambda p: None
    required: Tuple[RequiredParam, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return f"{self.resource}:{self.operation}"

    def shape_for(self, params: UnitParameters) -> ResponseShape:
        if self.response_shape is ResponseShape.SIMPLIFY_CHAT and not params.simplify:
            return ResponseShape.PASSTHROUGH
        return self.response_shape


# --- body builders ------------------------------------------------------------

def _chat_body(p: UnitParameters) -> Dict[str, Any]:
    body: Dict[str, Any] = {"messages": [{"role": "user", "content": p.message}]}
    if not is_empty(p.agent_id):
        body["agentId"] = p.agent_id
    return body


def _entry_body(p: UnitParameters) -> Dict[str, Any]:
    body: Dict[str, Any] = {"key": p.key}
    if not is_empty(p.value):
        body["value"] = p.value
    return body


def _entry_update_body(p: UnitParameters) -> Dict[str, Any]:
    body = _entry_body(p)
    if not is_empty(p.new_key):
        body["newKey"] = p.new_key
    return body


def _construct_path(p: UnitParameters) -> str:
    path = f"{ALIGNMENT_DATA}/by-pattern/{encode_path_segment(p.pattern)}/construct-json"
    if is_empty(p.template):
        return path
    # template is forwarded verbatim, placeholders are filled in server-side
    return f"{path}?template={encode_path_segment(p.template)}"


# --- required parameters ------------------------------------------------------

def _key(hint: str) -> Tuple[RequiredParam, ...]:
    return (RequiredParam("key", "Key", hint),)


_MESSAGE = (RequiredParam("message", "Message", "Provide a non-empty message.", trim=True),)
_PATTERN = (RequiredParam("pattern", "Pattern", "Provide a pattern to match keys (e.g., links.*)."),)


# --- registry -----------------------------------------------------------------

_SPECS: List[OperationSpec] = [
    OperationSpec(
        resource="chat", operation="sendMessage",
        name="Send Message", action="Send message to agent",
        method="POST", path=lambda p: "/api/chat", body=_chat_body,
        response_shape=ResponseShape.SIMPLIFY_CHAT, required=_MESSAGE,
    ),
    OperationSpec(
        resource="entry", operation="get",
        name="Get", action="Get entry by key",
        method="GET", path=lambda p: f"{ALIGNMENT_DATA}/by-key/{encode_path_segment(p.key)}",
        response_shape=ResponseShape.PASSTHROUGH, required=_key("Provide a key to retrieve."),
    ),
    OperationSpec(
        resource="entry", operation="getMany",
        name="Get Many", action="List entries",
        method="GET", path=lambda p: ALIGNMENT_DATA,
        response_shape=ResponseShape.FAN_OUT_ARRAY,
    ),
    OperationSpec(
        resource="entry", operation="create",
        name="Create", action="Create entry",
        method="POST", path=lambda p: ALIGNMENT_DATA, body=_entry_body,
        response_shape=ResponseShape.PASSTHROUGH, required=_key("Provide a key for the new entry."),
    ),
    OperationSpec(
        resource="entry", operation="upsert",
        name="Create or Update", action="Create or update entry",
        method="POST", path=lambda p: ALIGNMENT_DATA, body=_entry_body,
        response_shape=ResponseShape.PASSTHROUGH, required=_key("Provide a key for the entry."),
    ),
    OperationSpec(
        resource="entry", operation="update",
        name="Update", action="Update entry, optionally renaming the key",
        method="PUT", path=lambda p: ALIGNMENT_DATA, body=_entry_update_body,
        response_shape=ResponseShape.PASSTHROUGH, required=_key("Provide the key of the entry to update."),
    ),
    OperationSpec(
        resource="entry", operation="delete",
        name="Delete", action="Delete entry",
        method="DELETE", path=lambda p: f"{ALIGNMENT_DATA}/{encode_path_segment(p.key)}",
        response_shape=ResponseShape.WRAP_DELETED, required=_key("Provide the key of the entry to delete."),
    ),
    OperationSpec(
        resource="entry", operation="query",
        name="Query", action="List key value pairs by pattern",
        method="GET", path=lambda p: f"{ALIGNMENT_DATA}/by-pattern/{encode_path_segment(p.pattern)}",
        response_shape=ResponseShape.WRAP_PATTERN_RESULT, required=_PATTERN,
    ),
    OperationSpec(
        resource="entry", operation="queryConstruct",
        name="Query + Construct", action="Construct JSON from pattern matches",
        method="GET", path=_construct_path,
        response_shape=ResponseShape.FAN_OUT_ARRAY, required=_PATTERN,
    ),
]

OPERATIONS = MappingProxyType({(s.resource, s.operation): s for s in _SPECS})

# Remediation shown when a unit fails for any reason other than a missing parameter.
RESOURCE_HINTS = MappingProxyType({
    "chat": "Check your App Password and ensure the Agent ID is valid if provided.",
    "entry": "Check required parameters and ensure your App Password is valid.",
})
UNSUPPORTED_HINT = "Select a valid resource and operation."


def resolve(resource: str, operation: str) -> OperationSpec:
    try:
        return OPERATIONS[(resource, operation)]
    except KeyError:
        raise UnsupportedOperationError(resource, operation) from None


def list_operations() -> List[OperationSpec]:
    return list(OPERATIONS.values())


# --- response shaping ---------------------------------------------------------

_CHAT_DEFAULT_NULL = ("finish_reason", "scrubbed_message", "error")
_CHAT_TOKEN_FIELDS = ("prompt_tokens", "completion_tokens")


def simplify_chat(raw: Any) -> Dict[str, Any]:
    """
    Keep the chat fields hosts care about. Token counts are copied only when
    the server sent them; the string/error fields default to None.
    """
    raw = raw if isinstance(raw, dict) else {}
    out: Dict[str, Any] = {"response": raw.get("response")}
    for name in _CHAT_DEFAULT_NULL:
        out[name] = raw.get(name)
    for name in _CHAT_TOKEN_FIELDS:
        if name in raw:
            out[name] = raw[name]
    return out


def shape_response(shape: ResponseShape, raw: Any, params: UnitParameters) -> List[Any]:
    """
    Turn one raw API answer into the list of output payloads for the unit.
    Only FAN_OUT_ARRAY may return more (or fewer) than one payload.
    """
    if shape is ResponseShape.FAN_OUT_ARRAY:
        return list(raw) if isinstance(raw, list) else [raw]
    if shape is ResponseShape.SIMPLIFY_CHAT:
        return [simplify_chat(raw)]
    if shape is ResponseShape.WRAP_DELETED:
        return [{"deleted": True, "key": params.key}]
    if shape is ResponseShape.WRAP_PATTERN_RESULT:
        return [{"pattern": params.pattern, "result": raw}]
    return [raw]
