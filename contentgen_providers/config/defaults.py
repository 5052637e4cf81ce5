"""contentgen_providers.config.defaults
===================================

Small, stable default values used across the package. Everything here can be
overridden through environment variables, the optional config file, or
session settings. Only plain constants live in this module (no I/O, no
imports from other package modules).
"""

from __future__ import annotations

# ---- Per-backend defaults ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-pro"
GEMINI_DEFAULT_EMBEDDING_MODEL = "text-embedding-004"

OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"

OLLAMA_DEFAULT_MODEL = "llama3"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"
# Ollama serves its OpenAI-compatible API under this path.
OLLAMA_OPENAI_PATH_SUFFIX = "/v1"
# The OpenAI SDK refuses an empty key; Ollama ignores whatever is sent.
OLLAMA_PLACEHOLDER_API_KEY = "ollama"

# ---- Call policy ----
DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_MAX_RETRIES = 3

# ---- Streaming ----
# Minimum buffered text length before an interim (pre-completion) flush.
STREAM_FLUSH_THRESHOLD = 10

# ---- Token estimate ----
CHARS_PER_TOKEN = 4

# ---- Client identity ----
PACKAGE_VERSION = "0.1.0"
USER_AGENT_PRODUCT = "ContentGen"
USER_AGENT = f"{USER_AGENT_PRODUCT}/{PACKAGE_VERSION}"

# ---- CLI ----
CLI_DEFAULT_PROMPT = "Say hello in one short sentence."


__all__ = [
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_EMBEDDING_MODEL",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "OLLAMA_OPENAI_PATH_SUFFIX",
    "OLLAMA_PLACEHOLDER_API_KEY",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_RETRIES",
    "STREAM_FLUSH_THRESHOLD",
    "CHARS_PER_TOKEN",
    "PACKAGE_VERSION",
    "USER_AGENT_PRODUCT",
    "USER_AGENT",
    "CLI_DEFAULT_PROMPT",
]
