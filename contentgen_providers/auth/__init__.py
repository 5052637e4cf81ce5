"""Auth method / provider resolution and per-session generator configuration."""

from .selection import AuthType, DEFAULT_PROVIDER, ProviderKind, ResolvedAuth
from .settings import Settings
from .resolver import resolve_auth, validate_auth_method
from .generator_config import GeneratorConfig, create_generator_config

__all__ = [
    "AuthType",
    "DEFAULT_PROVIDER",
    "ProviderKind",
    "ResolvedAuth",
    "Settings",
    "resolve_auth",
    "validate_auth_method",
    "GeneratorConfig",
    "create_generator_config",
]
