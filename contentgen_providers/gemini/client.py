"""Google Gemini / Vertex AI generator built on the ``google-genai`` SDK.

Purpose
-------
Serve ``gemini-api-key`` and ``vertex-ai`` sessions. The internal content
model already follows the Google content API, so translation is limited to
snake_case keys, tool declarations and sampling parameter names.

External dependencies
---------------------
- ``google-genai`` (``genai.Client``; ``client.models.generate_content``,
  ``generate_content_stream``, ``count_tokens``, ``embed_content``).

Failure modes
-------------
- Every SDK failure is re-raised as :class:`ProviderCallError` tagged
  ``gemini`` with the failing phase.

Timeouts
--------
``timeout_seconds`` is passed to the SDK as ``HttpOptions.timeout`` in
milliseconds. The SDK owns retries.
"""

from __future__ import annotations

import logging
import re
from contextlib import ExitStack
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from google import genai
from google.genai import types

from ..auth.generator_config import GeneratorConfig
from ..base.errors import wrap_call_error
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    Content,
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
    Tool,
)
from ..base.streaming import register_stream_cleanup
from ..base.tokens import joined_text
from ..config.defaults import GEMINI_DEFAULT_EMBEDDING_MODEL, USER_AGENT
from .response_mapping import response_from_google, usage_from_google

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def _part_to_sdk(part: Part) -> Dict[str, Any]:
    if part.function_call is not None:
        fc = part.function_call
        call: Dict[str, Any] = {"name": fc.name, "args": dict(fc.args)}
        if fc.id is not None:
            call["id"] = fc.id
        return {"function_call": call}
    if part.function_response is not None:
        fr = part.function_response
        payload = fr.response if isinstance(fr.response, Mapping) else {"output": fr.response}
        resp: Dict[str, Any] = {"name": fr.name or "", "response": dict(payload)}
        if fr.id is not None:
            resp["id"] = fr.id
        return {"function_response": resp}
    return {"text": part.text}


def to_sdk_contents(contents: Iterable[Content]) -> List[Dict[str, Any]]:
    """Render internal contents as ``google-genai`` content dicts.

    The content API has no ``tool`` role; tool results travel as ``user``.
    """
    return [
        {
            "role": "user" if c.role == "tool" else c.role,
            "parts": [_part_to_sdk(p) for p in c.parts],
        }
        for c in contents
    ]


def to_sdk_tools(tools: Iterable[Tool]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for tool in tools:
        decls = []
        for decl in tool.function_declarations:
            item: Dict[str, Any] = {"name": decl.name, "description": decl.description}
            if decl.parameters is not None:
                item["parameters"] = decl.parameters
            decls.append(item)
        out.append({"function_declarations": decls})
    return out


def to_sdk_config(sampling: Mapping[str, Any], tools: Iterable[Tool] = ()) -> Dict[str, Any]:
    """``GenerateContentConfig`` fields: snake_case sampling plus tools."""
    config: Dict[str, Any] = {_snake(k): v for k, v in sampling.items() if v is not None}
    sdk_tools = to_sdk_tools(tools)
    if sdk_tools:
        config["tools"] = sdk_tools
    return config


class GoogleGenAIGenerator:
    """``ContentGenerator`` backed by ``google.genai.Client``.

    Parameters
    ----------
    config:
        Session configuration; ``vertexai`` selects the Vertex AI endpoint.
    client:
        Pre-built SDK client (tests inject fakes here).
    """

    def __init__(self, config: GeneratorConfig, client: Any = None) -> None:
        self.config = config
        self._logger = get_logger("contentgen.gemini")
        self._client = client if client is not None else self._make_client()

    @property
    def provider_name(self) -> str:
        return self.config.provider.value

    @property
    def client(self) -> Any:
        return self._client

    def _make_client(self) -> genai.Client:
        cfg = self.config
        http_options = types.HttpOptions(
            timeout=int(cfg.timeout_seconds * 1000),
            headers={"User-Agent": USER_AGENT},
        )
        if cfg.vertexai and not cfg.api_key:
            return genai.Client(
                vertexai=True,
                project=cfg.project,
                location=cfg.location,
                http_options=http_options,
            )
        return genai.Client(api_key=cfg.api_key, vertexai=cfg.vertexai, http_options=http_options)

    def _model(self, request: Any) -> str:
        return getattr(request, "model", None) or self.config.model

    def _ctx(self, model: str) -> LogContext:
        return LogContext(provider=self.provider_name, model=model, auth_type=self.config.auth_type.value)

    def _sdk_config(self, request: GenerateContentRequest) -> Dict[str, Any]:
        sampling = dict(self.config.sampling_params)
        sampling.update(request.generation_config or {})
        return to_sdk_config(sampling, request.tools)

    def _call(self, fn, *, model: str, phase: str, **kwargs: Any) -> Any:
        try:
            return fn(model=model, **kwargs)
        except Exception as exc:  # noqa: BLE001
            err = wrap_call_error(exc, provider=self.provider_name, model=model, phase=phase)
            normalized_log_event(
                self._logger,
                f"{'chat' if phase == 'generate' else phase}.error",
                self._ctx(model),
                phase=phase,
                error_code=err.code.value,
                level=logging.ERROR,
                message=err.message,
            )
            raise err from exc

    def generate_content(self, request: GenerateContentRequest) -> GenerateContentResponse:
        model = self._model(request)
        ctx = self._ctx(model)
        normalized_log_event(
            self._logger, "chat.start", ctx, phase="start", messages=len(request.contents), has_tools=bool(request.tools)
        )
        raw = self._call(
            self._client.models.generate_content,
            model=model,
            phase="generate",
            contents=to_sdk_contents(request.contents),
            config=self._sdk_config(request),
        )
        response = response_from_google(raw)
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=usage_from_google(raw),
            finish_reason=response.finish_reason.value if response.finish_reason else None,
        )
        return response

    def generate_content_stream(self, request: GenerateContentRequest) -> Iterator[GenerateContentResponse]:
        """Yield one response per SDK chunk; the SDK already merges tool calls."""
        model = self._model(request)
        ctx = self._ctx(model)
        normalized_log_event(
            self._logger, "stream.start", ctx, phase="start", messages=len(request.contents), has_tools=bool(request.tools)
        )
        stream = self._call(
            self._client.models.generate_content_stream,
            model=model,
            phase="stream",
            contents=to_sdk_contents(request.contents),
            config=self._sdk_config(request),
        )
        emitted = 0
        tokens: Optional[dict] = None
        with ExitStack() as stack:
            register_stream_cleanup(stream, stack)
            try:
                for chunk in stream:
                    tokens = usage_from_google(chunk) or tokens
                    emitted += 1
                    yield response_from_google(chunk)
            except Exception as exc:  # noqa: BLE001
                err = wrap_call_error(exc, provider=self.provider_name, model=model, phase="stream")
                normalized_log_event(
                    self._logger,
                    "stream.error",
                    ctx,
                    phase="stream",
                    error_code=err.code.value,
                    level=logging.ERROR,
                    message=err.message,
                )
                raise err from exc
            finally:
                normalized_log_event(
                    self._logger, "stream.end", ctx, phase="finalize", emitted=emitted > 0, tokens=tokens, emitted_count=emitted
                )

    def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        model = self._model(request)
        raw = self._call(
            self._client.models.count_tokens,
            model=model,
            phase="count_tokens",
            contents=to_sdk_contents(request.contents),
        )
        return CountTokensResponse(total_tokens=int(getattr(raw, "total_tokens", 0) or 0))

    def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        model = request.model or GEMINI_DEFAULT_EMBEDDING_MODEL
        raw = self._call(
            self._client.models.embed_content,
            model=model,
            phase="embed",
            contents=joined_text(request.contents),
        )
        embeddings = getattr(raw, "embeddings", None) or ()
        values = getattr(embeddings[0], "values", None) if embeddings else None
        return EmbedContentResponse(embedding=values or ())


__all__ = [
    "GoogleGenAIGenerator",
    "to_sdk_contents",
    "to_sdk_tools",
    "to_sdk_config",
]
