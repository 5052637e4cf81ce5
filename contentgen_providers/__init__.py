"""contentgen_providers package

Provider-abstraction layer for a conversational-AI client.

Purpose:
    Resolve the session's auth method and backend, build one
    ``ContentGenerator`` for it (Gemini / Vertex AI through ``google-genai``,
    or the OpenAI-compatible family ``openai`` / ``deepseek`` / ``ollama``
    through the ``openai`` SDK), and answer every call with Google-shaped
    responses regardless of the backend.

Public API (re-exported):
    - Version: ``__version__``
    - Session wiring: :func:`create_session`, :func:`create_content_generator`
    - Resolution: :func:`resolve_auth`, :func:`create_generator_config`
    - Factory: :class:`GeneratorFactory`
    - Errors: :class:`ProviderCallError`, :class:`ResolutionError` and its
      subclasses
"""

from .config.defaults import PACKAGE_VERSION as __version__
from .auth import (
    AuthType,
    GeneratorConfig,
    ProviderKind,
    ResolvedAuth,
    Settings,
    create_generator_config,
    resolve_auth,
    validate_auth_method,
)
from .base.errors import (
    ErrorCode,
    MissingCredentialError,
    ProviderCallError,
    ProviderError,
    ResolutionError,
    UnresolvedAuthError,
    UnsupportedProviderError,
)
from .base.factory import GeneratorFactory, create_generator
from .base.interfaces import ContentGenerator
from .session import GeneratorSession, create_content_generator, create_session

__all__ = [
    "__version__",
    "AuthType",
    "GeneratorConfig",
    "ProviderKind",
    "ResolvedAuth",
    "Settings",
    "create_generator_config",
    "resolve_auth",
    "validate_auth_method",
    "ErrorCode",
    "MissingCredentialError",
    "ProviderCallError",
    "ProviderError",
    "ResolutionError",
    "UnresolvedAuthError",
    "UnsupportedProviderError",
    "GeneratorFactory",
    "create_generator",
    "ContentGenerator",
    "GeneratorSession",
    "create_content_generator",
    "create_session",
]
