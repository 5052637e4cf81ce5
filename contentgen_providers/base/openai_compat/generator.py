"""Content generator for the OpenAI-compatible backend family.

Purpose
-------
One implementation serves ``openai``, ``deepseek`` and ``ollama``. The alias
profile supplies the per-alias base URL, credential rule and headers; the
request translator, stream normalizer and response assembler do the format
work. This class wires them to the ``openai`` SDK and adds logging.

External dependencies
---------------------
- ``openai`` SDK (``OpenAI`` client, ``chat.completions.create`` and
  ``embeddings.create``).
- ``httpx`` client from :mod:`contentgen_providers.base.http`, carrying the
  session proxy and TLS settings.

Failure modes
-------------
- :class:`MissingCredentialError` at construction when the alias needs a key
  and none is configured. No client is created in that case.
- :class:`ProviderCallError` for any failure while calling the backend,
  classified by :func:`classify_exception` and tagged with the alias name.

Timeouts and retries are handed to the SDK client (``timeout`` and
``max_retries``); no additional deadline is enforced here.
"""
from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any, Dict, Iterator, Optional

from openai import OpenAI

from ...auth.generator_config import GeneratorConfig
from ...config.defaults import USER_AGENT
from ..errors import MissingCredentialError, ProviderCallError, wrap_call_error
from ..http import get_httpx_client
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentRequest,
    GenerateContentResponse,
)
from ..streaming import StreamNormalizer, StreamState, register_stream_cleanup
from ..tokens import estimate_tokens, joined_text
from .aliases import AliasProfile, profile_for
from .request_translator import to_provider_request
from .response_assembler import response_from_completion
from .wire import OpenAIChatCompletion, OpenAIEmbeddingResponse


class OpenAICompatibleGenerator:
    """``ContentGenerator`` over a chat-completions endpoint.

    Parameters
    ----------
    config:
        Session configuration; ``config.provider`` selects the alias.
    profile:
        Alias conventions; looked up from ``config.provider`` when omitted.
    client:
        Pre-built SDK client (tests inject fakes here).
    """

    def __init__(
        self,
        config: GeneratorConfig,
        profile: Optional[AliasProfile] = None,
        client: Any = None,
    ) -> None:
        self.config = config
        self.profile = profile or profile_for(config.provider)
        self.base_url = self.profile.resolve_base_url(config.base_url)
        self._api_key = self.profile.effective_api_key(config.api_key)
        if self.profile.requires_api_key and not self._api_key:
            raise MissingCredentialError(
                f"{config.provider.value} requires an API key; set it in settings or the environment",
                provider=config.provider.value,
            )
        self._logger = get_logger(f"contentgen.{config.provider.value}")
        self._client = client if client is not None else self._make_client()

    @property
    def provider_name(self) -> str:
        return self.config.provider.value

    @property
    def client(self) -> Any:
        return self._client

    def _make_client(self) -> OpenAI:
        headers: Dict[str, str] = {"User-Agent": USER_AGENT}
        headers.update(self.profile.headers(self._api_key, self.config.api_version))
        return OpenAI(
            api_key=self._api_key,
            base_url=self.base_url,
            default_headers=headers,
            timeout=self.config.timeout_seconds,
            max_retries=self.config.max_retries,
            http_client=get_httpx_client(self.config.transport, self.config.timeout_seconds),
        )

    # ----- helpers -----

    def _model(self, request: Any) -> str:
        return getattr(request, "model", None) or self.config.model

    def _ctx(self, model: str) -> LogContext:
        return LogContext(provider=self.provider_name, model=model, auth_type=self.config.auth_type.value)

    def _build_params(self, request: GenerateContentRequest, model: str, *, stream: bool) -> Dict[str, Any]:
        sampling = dict(self.config.sampling_params)
        sampling.update(request.generation_config or {})
        return to_provider_request(
            request.contents,
            request.tools,
            sampling,
            model=model,
            stream=stream,
        ).to_params()

    def _create(self, params: Dict[str, Any], *, model: str, phase: str) -> Any:
        try:
            return self._client.chat.completions.create(**params)
        except Exception as exc:  # noqa: BLE001
            raise wrap_call_error(exc, provider=self.provider_name, model=model, phase=phase) from exc

    def _log_error(self, event: str, ctx: LogContext, err: ProviderCallError, **fields: Any) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase=err.phase,
            error_code=err.code.value,
            level=logging.ERROR,
            message=err.message,
            retryable=err.retryable,
            **fields,
        )

    # ----- ContentGenerator -----

    def generate_content(self, request: GenerateContentRequest) -> GenerateContentResponse:
        model = self._model(request)
        ctx = self._ctx(model)
        params = self._build_params(request, model, stream=False)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(params["messages"]),
            has_tools=bool(request.tools),
        )
        try:
            raw = self._create(params, model=model, phase="generate")
        except ProviderCallError as err:
            self._log_error("chat.error", ctx, err)
            raise
        response = response_from_completion(raw, ctx=ctx)
        usage = OpenAIChatCompletion.model_validate(raw, from_attributes=True).usage
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=usage.to_dict() if usage is not None else None,
            finish_reason=response.finish_reason.value if response.finish_reason else None,
            function_calls=len(response.function_calls or ()),
        )
        return response

    def generate_content_stream(self, request: GenerateContentRequest) -> Iterator[GenerateContentResponse]:
        """Stream normalized responses.

        Nothing is sent until the first ``next()``. Closing the iterator early
        closes the underlying SDK stream.
        """
        model = self._model(request)
        ctx = self._ctx(model)
        params = self._build_params(request, model, stream=True)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            messages=len(params["messages"]),
            has_tools=bool(request.tools),
        )
        try:
            stream = self._create(params, model=model, phase="stream")
        except ProviderCallError as err:
            self._log_error("stream.error", ctx, err)
            raise

        normalizer = StreamNormalizer(self.config.stream_flush_threshold, ctx=ctx, logger=self._logger)
        with ExitStack() as stack:
            register_stream_cleanup(stream, stack)
            try:
                yield from normalizer.run(stream)
            except Exception as exc:  # noqa: BLE001
                err = wrap_call_error(exc, provider=self.provider_name, model=model, phase="stream")
                self._log_error("stream.error", ctx, err, emitted_count=normalizer.metrics.emitted)
                raise err from exc
            finally:
                metrics = normalizer.metrics
                normalized_log_event(
                    self._logger,
                    "stream.end",
                    ctx,
                    phase="finalize",
                    emitted=metrics.emitted > 0,
                    tokens=metrics.tokens,
                    completed=normalizer.state is StreamState.DONE,
                    **metrics.to_dict(),
                )

    def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        # Chat-completions servers expose no tokenizer endpoint.
        return CountTokensResponse(total_tokens=estimate_tokens(request.contents))

    def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        model = self._model(request)
        try:
            raw = self._client.embeddings.create(model=model, input=joined_text(request.contents))
        except Exception as exc:  # noqa: BLE001
            err = wrap_call_error(exc, provider=self.provider_name, model=model, phase="embed")
            self._log_error("embed.error", self._ctx(model), err)
            raise err from exc
        data = OpenAIEmbeddingResponse.model_validate(raw, from_attributes=True).data or []
        return EmbedContentResponse(embedding=data[0].embedding if data else ())


__all__ = ["OpenAICompatibleGenerator"]
