"""Internal content -> chat-completions request translation."""

from __future__ import annotations

import copy
import json

import pytest

from contentgen_providers.base.models import (
    Content,
    FunctionCall,
    FunctionDeclaration,
    FunctionResponse,
    Part,
    Tool,
)
from contentgen_providers.base.openai_compat import convert_schema, map_sampling, to_messages, to_provider_request
from contentgen_providers.base.openai_compat.request_translator import stringify_tool_payload


def _tool_result(payload, call_id="call_1", role="tool"):
    return Content(role=role, parts=(Part(function_response=FunctionResponse(id=call_id, response=payload, name="f")),))


@pytest.mark.parametrize(
    "payload, expected",
    [
        ("plain text", "plain text"),
        ({"output": "42"}, "42"),
        ({"output": {"rows": 3}}, '{"rows":3}'),
        ({"content": "from content"}, "from content"),
        ({"status": "ok"}, '{"status":"ok"}'),
        ([1, 2], "[1,2]"),
        (7, "7"),
    ],
)
def test_tool_results_become_tool_messages(payload, expected):
    (msg,) = to_messages([_tool_result(payload)])
    assert msg.role == "tool"  # nosec B101
    assert msg.tool_call_id == "call_1"  # nosec B101
    assert msg.content == expected  # nosec B101
    assert stringify_tool_payload(payload) == expected  # nosec B101


def test_function_response_wins_over_message_role():
    (msg,) = to_messages([_tool_result({"output": "done"}, role="user")])
    assert (msg.role, msg.content) == ("tool", "done")  # nosec B101


def test_model_function_call_is_replayed_as_json():
    content = Content(
        role="model",
        parts=(Part(function_call=FunctionCall(name="lookup", args={"q": "x"}, id="call_9")),),
    )
    (msg,) = to_messages([content])
    assert msg.role == "assistant"  # nosec B101
    assert json.loads(msg.content) == {"name": "lookup", "args": {"q": "x"}, "id": "call_9"}  # nosec B101


def test_text_parts_concatenate_and_empty_messages_keep_their_slot():
    contents = [
        Content(role="user", parts=(Part(text="Hello "), Part(text="there"))),
        Content(role="model", parts=()),
        Content.from_text("again"),
    ]
    msgs = to_messages(contents)
    assert [(m.role, m.content) for m in msgs] == [  # nosec B101
        ("user", "Hello there"),
        ("assistant", ""),
        ("user", "again"),
    ]


def test_schema_conversion_is_recursive_and_does_not_mutate():
    schema = {
        "type": "OBJECT",
        "properties": {
            "count": {"type": "INTEGER", "minimum": 1},
            "tags": {"type": "ARRAY", "items": {"type": "STRING", "minLength": "2"}, "maxItems": "5"},
            "flag": {"type": "Boolean"},
        },
        "required": ["count"],
    }
    before = copy.deepcopy(schema)
    converted = convert_schema(schema)
    assert schema == before  # nosec B101
    assert converted == {  # nosec B101
        "type": "object",
        "properties": {
            "count": {"type": "integer", "minimum": 1},
            "tags": {"type": "array", "items": {"type": "string", "minLength": 2}, "maxItems": 5},
            "flag": {"type": "boolean"},
        },
        "required": ["count"],
    }


def test_schema_passthrough_for_non_mappings():
    assert convert_schema(None) is None  # nosec B101
    assert convert_schema({"type": "Custom"}) == {"type": "custom"}  # nosec B101
    assert convert_schema({"maxLength": "many"}) == {"maxLength": "many"}  # nosec B101


def test_sampling_names_are_mapped_and_absent_keys_not_defaulted():
    assert map_sampling(  # nosec B101
        {"maxOutputTokens": 10, "topP": 0.5, "stopSequences": ["x"], "temperature": 0.1, "topK": None}
    ) == {"max_tokens": 10, "top_p": 0.5, "stop": ["x"], "temperature": 0.1}
    assert map_sampling(None) == {}  # nosec B101


def test_translation_is_deterministic():
    contents = [Content.from_text("hi"), _tool_result({"output": "r"})]
    tools = [Tool((FunctionDeclaration("f", "d", {"type": "OBJECT"}),))]
    sampling = {"temperature": 0.3, "topK": 2}
    a = to_provider_request(contents, tools, sampling, model="m").to_params()
    b = to_provider_request(contents, tools, sampling, model="m").to_params()
    assert json.dumps(a, sort_keys=True) == json.dumps(b, sort_keys=True)  # nosec B101


def test_tool_choice_only_sent_with_tools():
    params = to_provider_request([Content.from_text("hi")], model="m", stream=True).to_params()
    assert "tools" not in params and "tool_choice" not in params  # nosec B101
    assert params["stream"] is True  # nosec B101
    tools = [Tool((FunctionDeclaration("a"), FunctionDeclaration("b")))]
    params = to_provider_request([Content.from_text("hi")], tools, model="m").to_params()
    assert [t["function"]["name"] for t in params["tools"]] == ["a", "b"]  # nosec B101
    assert params["tool_choice"] == "auto"  # nosec B101
