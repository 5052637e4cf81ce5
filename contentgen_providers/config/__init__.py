"""Layered configuration for content generator backends.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by ``CONTENTGEN_CONFIG_FILE``
    3. Environment variables ``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY``,
       ``<PROVIDER>_BASE_URL``, ``<PROVIDER>_API_VERSION``
    4. In-code overrides passed to :func:`get_provider_config`

External config file example::

    openai:
      model: gpt-4o-mini
    ollama:
      model: qwen2.5-coder
      base_url: http://gpu-box:11434

The environment is passed in explicitly and only read.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .defaults import (
    DEEPSEEK_DEFAULT_MODEL,
    GEMINI_DEFAULT_MODEL,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
)
from .env import provider_env_overrides, read_env

CONFIG_FILE_ENV = "CONTENTGEN_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "gemini": {"model": GEMINI_DEFAULT_MODEL},
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "deepseek": {"model": DEEPSEEK_DEFAULT_MODEL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL},
}

_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


class ConfigFileError(ValueError):
    """The external config file exists but is neither a JSON nor a YAML mapping."""


def _parse_config_text(text: str, path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigFileError(f"{path}: not valid JSON or YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def load_config_file(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load (and cache per path) the file named by ``CONTENTGEN_CONFIG_FILE``.

    A missing variable or a missing file yields ``{}``.
    """
    path = read_env(CONFIG_FILE_ENV, env)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    data = _parse_config_text(p.read_text(encoding="utf-8"), p)
    _FILE_CACHE[path] = data
    return data


def reset_config_cache() -> None:
    """Forget previously loaded config files."""
    _FILE_CACHE.clear()


def get_provider_config(
    provider: str,
    overrides: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Return the merged configuration mapping for ``provider``.

    ``None`` values in ``overrides`` are ignored so unset settings never mask
    lower layers.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})

    file_cfg = load_config_file(env).get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= provider_env_overrides(name, env)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model(provider: str, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    return get_provider_config(provider, env=env).get("model")


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "ConfigFileError",
    "get_provider_config",
    "get_model",
    "load_config_file",
    "reset_config_cache",
]
