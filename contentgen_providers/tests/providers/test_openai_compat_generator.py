"""OpenAICompatibleGenerator against a fake OpenAI SDK client."""

from __future__ import annotations

from typing import Any, Iterator, List

import pytest

from contentgen_providers.auth import AuthType, GeneratorConfig, ProviderKind
from contentgen_providers.base.errors import ErrorCode, MissingCredentialError, ProviderCallError
from contentgen_providers.base.models import (
    Content,
    CountTokensRequest,
    EmbedContentRequest,
    FinishReason,
    FunctionDeclaration,
    GenerateContentRequest,
    Tool,
)
from contentgen_providers.base.openai_compat.generator import OpenAICompatibleGenerator


def _config(provider: ProviderKind = ProviderKind.OPENAI, **kw: Any) -> GeneratorConfig:
    kw.setdefault("api_key", "sk-test")
    kw.setdefault("model", "gpt-4o-mini")
    return GeneratorConfig(provider=provider, auth_type=AuthType.USE_OPENAI, **kw)


def _completion(content: str = "hi", tool_calls=None, finish: str = "stop") -> dict:
    message: dict = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "cmpl-1",
        "choices": [{"index": 0, "message": message, "finish_reason": finish}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


class _FakeStream:
    """Iterable chunk source with a ``close`` like the SDK's ``Stream``."""

    def __init__(self, chunks: List[dict], error: Exception | None = None) -> None:
        self.chunks = chunks
        self.error = error
        self.closed = False

    def __iter__(self) -> Iterator[dict]:
        yield from self.chunks
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.closed = True


class _RateLimited(Exception):
    status_code = 429


def _text_chunk(text: str, finish: str | None = None) -> dict:
    return {"choices": [{"index": 0, "delta": {"content": text}, "finish_reason": finish}]}


def test_generate_content_maps_reply_and_params(fake_openai):
    client = fake_openai(result=_completion("hello there"))
    gen = OpenAICompatibleGenerator(
        _config(sampling_params={"temperature": 0.7, "topP": 0.9}),
        client=client,
    )
    tool = Tool((FunctionDeclaration("lookup", "find things", {"type": "OBJECT", "properties": {}}),))
    request = GenerateContentRequest(
        contents=(Content.from_text("hi"),),
        tools=(tool,),
        generation_config={"temperature": 0.2, "maxOutputTokens": 64, "topK": 4},
    )
    response = gen.generate_content(request)

    assert response.text == "hello there"  # nosec B101
    assert response.finish_reason is FinishReason.STOP  # nosec B101
    (params,) = client.chat.completions.calls
    assert params["model"] == "gpt-4o-mini"  # nosec B101
    assert params["messages"] == [{"role": "user", "content": "hi"}]  # nosec B101
    assert params["temperature"] == 0.2  # nosec B101
    assert params["top_p"] == 0.9  # nosec B101
    assert params["max_tokens"] == 64  # nosec B101
    assert params["extra_body"] == {"top_k": 4}  # nosec B101
    assert params["tool_choice"] == "auto"  # nosec B101
    assert params["tools"][0]["function"]["parameters"] == {"type": "object", "properties": {}}  # nosec B101
    assert "stream" not in params  # nosec B101


def test_request_model_overrides_session_model(fake_openai):
    client = fake_openai(result=_completion())
    gen = OpenAICompatibleGenerator(_config(), client=client)
    gen.generate_content(GenerateContentRequest.from_prompt("x", model="gpt-4.1"))
    assert client.chat.completions.calls[0]["model"] == "gpt-4.1"  # nosec B101


def test_generate_content_returns_tool_calls(fake_openai):
    calls = [{"id": "call_1", "type": "function", "function": {"name": "lookup", "arguments": '{"q": "x"}'}}]
    gen = OpenAICompatibleGenerator(_config(), client=fake_openai(result=_completion("", calls, "tool_calls")))
    response = gen.generate_content(GenerateContentRequest.from_prompt("find x"))
    (call,) = response.function_calls
    assert (call.name, dict(call.args), call.id) == ("lookup", {"q": "x"}, "call_1")  # nosec B101
    assert response.candidates[0]["content"]["parts"] == [  # nosec B101
        {"functionCall": {"name": "lookup", "args": {"q": "x"}, "id": "call_1"}}
    ]


def test_generate_content_logs_usage(fake_openai, log_events):
    gen = OpenAICompatibleGenerator(_config(), client=fake_openai(result=_completion()))
    gen.generate_content(GenerateContentRequest.from_prompt("hi"))
    (end,) = log_events.events("chat.end")
    assert end["tokens"] == {"prompt": 5, "completion": 2, "total": 7}  # nosec B101
    assert end["provider"] == "openai"  # nosec B101
    assert end["phase"] == "finalize"  # nosec B101
    assert end["emitted"] is True  # nosec B101


def test_call_failure_becomes_provider_call_error(fake_openai, log_events):
    gen = OpenAICompatibleGenerator(
        _config(ProviderKind.DEEPSEEK, model="deepseek-chat"),
        client=fake_openai(error=_RateLimited("slow down")),
    )
    with pytest.raises(ProviderCallError) as ei:
        gen.generate_content(GenerateContentRequest.from_prompt("hi"))
    err = ei.value
    assert err.provider == "deepseek"  # nosec B101
    assert err.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert err.retryable is True  # nosec B101
    assert err.phase == "generate"  # nosec B101
    assert isinstance(err.__cause__, _RateLimited)  # nosec B101
    (event,) = log_events.events("chat.error")
    assert event["error_code"] == "rate_limit"  # nosec B101
    assert event["_level"] == "ERROR"  # nosec B101


def test_missing_key_fails_before_any_client_exists(fake_openai):
    client = fake_openai(result=_completion())
    with pytest.raises(MissingCredentialError):
        OpenAICompatibleGenerator(_config(api_key=None), client=client)
    assert client.chat.completions.calls == []  # nosec B101


def test_ollama_needs_no_key_and_targets_v1(fake_openai):
    gen = OpenAICompatibleGenerator(
        _config(ProviderKind.OLLAMA, api_key=None, model="llama3", base_url="http://gpu:11434/"),
        client=fake_openai(result=_completion()),
    )
    assert gen.base_url == "http://gpu:11434/v1"  # nosec B101
    assert gen.provider_name == "ollama"  # nosec B101


def test_stream_is_lazy_and_normalized(fake_openai):
    stream = _FakeStream([_text_chunk("Hello, "), _text_chunk("world!"), _text_chunk("", finish="stop")])
    client = fake_openai(result=stream)
    gen = OpenAICompatibleGenerator(_config(), client=client)

    it = gen.generate_content_stream(GenerateContentRequest.from_prompt("hi"))
    assert client.chat.completions.calls == []  # nosec B101
    out = list(it)
    assert client.chat.completions.calls[0]["stream"] is True  # nosec B101
    assert [r.text for r in out] == ["Hello, world!", ""]  # nosec B101
    assert out[-1].finish_reason is FinishReason.STOP  # nosec B101
    assert stream.closed  # nosec B101


def test_stream_uses_configured_flush_threshold(fake_openai):
    stream = _FakeStream([_text_chunk("ab"), _text_chunk("cd"), _text_chunk("", finish="stop")])
    gen = OpenAICompatibleGenerator(_config(stream_flush_threshold=2), client=fake_openai(result=stream))
    texts = [r.text for r in gen.generate_content_stream(GenerateContentRequest.from_prompt("hi"))]
    assert texts == ["ab", "cd", ""]  # nosec B101


def test_stream_closed_when_consumer_stops_early(fake_openai, log_events):
    stream = _FakeStream([_text_chunk("0123456789"), _text_chunk("abcdefghij"), _text_chunk("", finish="stop")])
    gen = OpenAICompatibleGenerator(_config(), client=fake_openai(result=stream))
    it = gen.generate_content_stream(GenerateContentRequest.from_prompt("hi"))
    assert next(it).text == "0123456789"  # nosec B101
    it.close()
    assert stream.closed  # nosec B101
    (end,) = log_events.events("stream.end")
    assert end["completed"] is False  # nosec B101
    assert end["emitted_count"] == 1  # nosec B101


def test_stream_failure_mid_way_is_tagged_with_stream_phase(fake_openai):
    stream = _FakeStream([_text_chunk("0123456789")], error=ConnectionResetError("connection reset by peer"))
    gen = OpenAICompatibleGenerator(_config(ProviderKind.OLLAMA, api_key=None), client=fake_openai(result=stream))
    it = gen.generate_content_stream(GenerateContentRequest.from_prompt("hi"))
    assert next(it).text == "0123456789"  # nosec B101
    with pytest.raises(ProviderCallError) as ei:
        next(it)
    assert ei.value.phase == "stream"  # nosec B101
    assert ei.value.provider == "ollama"  # nosec B101
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert stream.closed  # nosec B101


def test_count_tokens_is_a_monotonic_estimate(fake_openai):
    gen = OpenAICompatibleGenerator(_config(), client=fake_openai())
    short = gen.count_tokens(CountTokensRequest((Content.from_text("abcd"),))).total_tokens
    longer = gen.count_tokens(CountTokensRequest((Content.from_text("abcd"), Content.from_text("e")))).total_tokens
    assert (short, longer) == (1, 2)  # nosec B101
    assert gen.count_tokens(CountTokensRequest(())).total_tokens == 0  # nosec B101


def test_embed_content_returns_first_vector(fake_openai):
    client = fake_openai(vector=[0.5, 0.25])
    gen = OpenAICompatibleGenerator(_config(), client=client)
    res = gen.embed_content(EmbedContentRequest((Content.from_text("a"), Content.from_text("b")), model="text-embedding-3-small"))
    assert res.embedding == (0.5, 0.25)  # nosec B101
    assert client.embeddings.calls == [{"model": "text-embedding-3-small", "input": "a\nb"}]  # nosec B101
