"""Generator factory.

Purpose
-------
Turn a session :class:`GeneratorConfig` into the one ``ContentGenerator``
that serves it. Branch selection is an exhaustive decision over the resolved
:class:`AuthType` and :class:`ProviderKind`; a combination that is not
handled raises instead of falling through.

Generator modules are imported lazily using ``importlib`` so that building a
Gemini session never imports the ``openai`` SDK and vice versa.

Failure modes
-------------
- :class:`MissingCredentialError` when the selected branch needs a key that
  is absent. Raised before any client object is created.
- :class:`UnsupportedProviderError` for an unknown provider, a failed adapter
  import (chained), or a code-assist session with no code-assist factory.

No retries or fallbacks: the factory either returns a generator or raises.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Callable, Dict, Optional, Tuple

from ..auth.generator_config import GeneratorConfig
from ..auth.selection import AuthType, ProviderKind
from .errors import MissingCredentialError, UnsupportedProviderError
from .interfaces import ContentGenerator
from .logging import LogContext, get_logger, normalized_log_event

CodeAssistFactory = Callable[[AuthType, GeneratorConfig], ContentGenerator]

_logger = get_logger("contentgen.factory")


def create_generator(
    config: GeneratorConfig,
    *,
    code_assist_factory: Optional[CodeAssistFactory] = None,
    **kwargs: Any,
) -> ContentGenerator:
    """Shortcut for :meth:`GeneratorFactory.build`."""
    return GeneratorFactory.build(config, code_assist_factory=code_assist_factory, **kwargs)


class GeneratorFactory:
    """Build generators from a resolved configuration.

    Design notes
    ------------
    - ``_GENERATORS`` maps a branch name to its module path and class name.
    - Extra ``kwargs`` (for example an injected SDK ``client``) are forwarded
      to the generator constructor.
    """

    _GENERATORS: Dict[str, Dict[str, str]] = {
        "openai_compat": {
            "module": "contentgen_providers.base.openai_compat.generator",
            "class": "OpenAICompatibleGenerator",
        },
        "gemini": {
            "module": "contentgen_providers.gemini.client",
            "class": "GoogleGenAIGenerator",
        },
    }

    @classmethod
    def build(
        cls,
        config: GeneratorConfig,
        *,
        code_assist_factory: Optional[CodeAssistFactory] = None,
        **kwargs: Any,
    ) -> ContentGenerator:
        """Construct the generator for ``config``.

        Parameters
        ----------
        config:
            Session configuration produced by ``create_generator_config``.
        code_assist_factory:
            Collaborator building generators for ``oauth-personal`` and
            ``cloud-shell`` sessions; called with ``(auth_type, config)``.
        **kwargs:
            Forwarded to the generator constructor.
        """
        auth = config.auth_type
        provider = config.provider
        if auth is AuthType.USE_OPENAI:
            generator = cls._build_openai_compatible(config, **kwargs)
        elif auth is AuthType.USE_GEMINI or auth is AuthType.USE_VERTEX_AI:
            generator = cls._build_gemini(config, **kwargs)
        elif auth is AuthType.LOGIN_WITH_GOOGLE or auth is AuthType.CLOUD_SHELL:
            if code_assist_factory is None:
                raise UnsupportedProviderError(
                    f"auth method '{auth.value}' needs a code-assist generator factory",
                    provider=provider.value,
                )
            generator = code_assist_factory(auth, config)
        else:  # pragma: no cover - closed enum
            raise UnsupportedProviderError(f"unhandled auth method '{auth.value}'", provider=provider.value)

        normalized_log_event(
            _logger,
            "generator.build",
            LogContext(provider=provider.value, model=config.model, auth_type=auth.value),
            phase="build",
            generator=type(generator).__name__,
        )
        return generator

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Provider names this factory can build, in declaration order."""
        return tuple(kind.value for kind in ProviderKind)

    @classmethod
    def _build_openai_compatible(cls, config: GeneratorConfig, **kwargs: Any) -> ContentGenerator:
        if not config.provider.is_openai_compatible:
            raise UnsupportedProviderError(
                f"'{config.provider.value}' is not an OpenAI-compatible provider",
                provider=config.provider.value,
            )
        from .openai_compat.aliases import profile_for

        profile = profile_for(config.provider)
        if profile.requires_api_key and not config.api_key:
            raise MissingCredentialError(
                f"{config.provider.value} requires an API key; set it in settings or the environment",
                provider=config.provider.value,
            )
        klass = cls._load("openai_compat")
        return klass(config, profile, **kwargs)

    @classmethod
    def _build_gemini(cls, config: GeneratorConfig, **kwargs: Any) -> ContentGenerator:
        if config.vertexai:
            if not config.api_key and not (config.project and config.location):
                raise MissingCredentialError(
                    "Vertex AI needs GOOGLE_API_KEY or GOOGLE_CLOUD_PROJECT and GOOGLE_CLOUD_LOCATION",
                    provider=config.provider.value,
                )
        elif not config.api_key:
            raise MissingCredentialError("GEMINI_API_KEY is not set", provider=config.provider.value)
        klass = cls._load("gemini")
        return klass(config, **kwargs)

    @classmethod
    def _load(cls, branch: str) -> type:
        spec = cls._GENERATORS[branch]
        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnsupportedProviderError(
                f"Failed to import module '{module_path}' for '{branch}' generators: {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnsupportedProviderError(
                f"Generator class '{class_name}' not found in '{module_path}'"
            ) from exc


__all__ = ["GeneratorFactory", "CodeAssistFactory", "create_generator"]
