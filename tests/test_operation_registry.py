# tests/test_operation_registry.py

import pytest

from agent700_adapter.core.errors import UnsupportedOperationError
from agent700_adapter.core.models import UnitParameters
from agent700_adapter.core.operations import (
    ResponseShape,
    list_operations,
    resolve,
    shape_response,
    simplify_chat,
)


def test_resolve_is_a_pure_lookup():
    assert resolve("entry", "get") is resolve("entry", "get")
    assert len(list_operations()) == 9


@pytest.mark.parametrize("resource, operation", [
    ("entry", "sendMessage"),
    ("chat", "get"),
    ("widget", "get"),
    ("entry", ""),
])
def test_unknown_pair_is_unsupported(resource, operation):
    with pytest.raises(UnsupportedOperationError, match=f"{resource}:{operation}"):
        resolve(resource, operation)


@pytest.mark.parametrize("operation, method, params, path", [
    ("get", "GET", {"key": "a b/c"}, "/api/alignment-data/by-key/a%20b%2Fc"),
    ("getMany", "GET", {}, "/api/alignment-data"),
    ("create", "POST", {"key": "k"}, "/api/alignment-data"),
    ("upsert", "POST", {"key": "k"}, "/api/alignment-data"),
    ("update", "PUT", {"key": "k"}, "/api/alignment-data"),
    ("delete", "DELETE", {"key": "links.Privacy"}, "/api/alignment-data/links.Privacy"),
    ("query", "GET", {"pattern": "links.*"}, "/api/alignment-data/by-pattern/links.*"),
])
def test_entry_wire_shapes(operation, method, params, path):
    spec = resolve("entry", operation)
    p = UnitParameters(**params)

    assert spec.method == method
    assert spec.path(p) == path


@pytest.mark.parametrize("operation, params, path", [
    ("query", {"pattern": "a/b?c"}, "/api/alignment-data/by-pattern/a%2Fb%3Fc"),
    ("query", {"pattern": "x&y#z"}, "/api/alignment-data/by-pattern/x%26y%23z"),
    ("queryConstruct", {"pattern": "a/b?c", "template": ""}, "/api/alignment-data/by-pattern/a%2Fb%3Fc/construct-json"),
    ("queryConstruct", {"pattern": "p", "template": "a&b=#"}, "/api/alignment-data/by-pattern/p/construct-json?template=a%26b%3D%23"),
    ("delete", {"key": "k!'()*"}, "/api/alignment-data/k!'()*"),
    ("delete", {"key": "é"}, "/api/alignment-data/%C3%A9"),
    ("delete", {"key": "a/b c"}, "/api/alignment-data/a%2Fb%20c"),
    ("get", {"key": "-_.~"}, "/api/alignment-data/by-key/-_.~"),
])
def test_path_segments_use_uri_component_encoding(operation, params, path):
    assert resolve("entry", operation).path(UnitParameters(**params)) == path


def test_query_construct_forwards_template_encoded():
    spec = resolve("entry", "queryConstruct")

    path = spec.path(UnitParameters(pattern="user_*"))

    assert path == (
        "/api/alignment-data/by-pattern/user_*/construct-json?template="
        "%7B%22key%22%3A%22%7B%7Bkey%7D%7D%22%2C%22value%22%3A%22%7B%7Bvalue%7D%7D%22%7D"
    )
    assert spec.body(UnitParameters(pattern="user_*")) is None


def test_query_construct_without_template_has_no_query_string():
    spec = resolve("entry", "queryConstruct")
    assert spec.path(UnitParameters(pattern="p", template="")) == "/api/alignment-data/by-pattern/p/construct-json"


def test_chat_body_omits_empty_agent_id():
    spec = resolve("chat", "sendMessage")

    assert spec.body(UnitParameters(message="hi")) == {"messages": [{"role": "user", "content": "hi"}]}
    assert spec.body(UnitParameters(message="hi", agent_id="")) == {"messages": [{"role": "user", "content": "hi"}]}
    assert spec.body(UnitParameters(message="hi", agent_id="agent-1")) == {
        "messages": [{"role": "user", "content": "hi"}],
        "agentId": "agent-1",
    }


def test_entry_bodies():
    create = resolve("entry", "create")
    update = resolve("entry", "update")

    assert create.body(UnitParameters(key="k", value={"a": 1})) == {"key": "k", "value": {"a": 1}}
    assert create.body(UnitParameters(key="k")) == {"key": "k"}
    # an empty object is still a value
    assert create.body(UnitParameters(key="k", value={})) == {"key": "k", "value": {}}
    assert update.body(UnitParameters(key="k", value=1, new_key="")) == {"key": "k", "value": 1}
    assert update.body(UnitParameters(key="k", value=1, new_key="k2")) == {"key": "k", "value": 1, "newKey": "k2"}
    # whitespace-only strings are data, not absence
    assert create.body(UnitParameters(key="k", value="   ")) == {"key": "k", "value": "   "}
    assert update.body(UnitParameters(key="k", value=1, new_key=" ")) == {"key": "k", "value": 1, "newKey": " "}
    assert create.body(UnitParameters(key="k", value="")) == {"key": "k"}


def test_chat_shape_depends_on_simplify():
    spec = resolve("chat", "sendMessage")
    assert spec.shape_for(UnitParameters(simplify=True)) is ResponseShape.SIMPLIFY_CHAT
    assert spec.shape_for(UnitParameters(simplify=False)) is ResponseShape.PASSTHROUGH


def test_simplify_chat_defaults_and_token_passthrough():
    assert simplify_chat({"response": "hello", "finish_reason": "stop"}) == {
        "response": "hello",
        "finish_reason": "stop",
        "scrubbed_message": None,
        "error": None,
    }

    full = simplify_chat({
        "response": "r", "finish_reason": "stop", "scrubbed_message": "s", "error": None,
        "prompt_tokens": 100, "completion_tokens": 50, "extra_field": "x",
    })
    assert full["prompt_tokens"] == 100
    assert full["completion_tokens"] == 50
    assert "extra_field" not in full


def test_shape_response_variants():
    p = UnitParameters(key="k", pattern="links.*")

    assert shape_response(ResponseShape.FAN_OUT_ARRAY, [{"a": 1}, {"b": 2}], p) == [{"a": 1}, {"b": 2}]
    assert shape_response(ResponseShape.FAN_OUT_ARRAY, [], p) == []
    assert shape_response(ResponseShape.FAN_OUT_ARRAY, {"a": 1}, p) == [{"a": 1}]
    assert shape_response(ResponseShape.WRAP_DELETED, {"whatever": True}, p) == [{"deleted": True, "key": "k"}]
    assert shape_response(ResponseShape.WRAP_PATTERN_RESULT, {"x": 1}, p) == [{"pattern": "links.*", "result": {"x": 1}}]
    assert shape_response(ResponseShape.PASSTHROUGH, "test-value", p) == ["test-value"]
