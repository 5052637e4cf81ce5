"""Session settings consumed by the resolver and the config builder.

Purpose
-------
Typed view of the already-loaded settings mapping (loading the settings file
is the caller's job). Keys accept either the camelCase spelling used in
settings files (``selectedAuthType``, ``baseURL``, ``samplingParams``) or the
snake_case field names.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation.

Failure modes
-------------
- ``pydantic.ValidationError`` on wrongly typed values. Unknown keys are
  ignored so unrelated settings do not break generator setup.
"""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Generator-related session settings.

    Attributes
    ----------
    selected_auth_type:
        Explicit auth method (``AuthType`` value or alias).
    provider:
        Explicit backend; non-default values override the environment.
    model, api_key, base_url, api_version:
        Backend overrides; ``None`` defers to config file / environment.
    timeout_seconds, max_retries:
        Contracts handed to the SDK client.
    sampling_params:
        Named numeric knobs in Google spelling (``temperature``,
        ``maxOutputTokens``, ``topP`` ...).
    proxy, verify_tls:
        Transport configuration for the HTTP client.
    stream_flush_threshold:
        Minimum buffered characters before an interim streaming flush.
    enable_logging:
        Emit per-request debug events (request shape, never content).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    selected_auth_type: Optional[str] = Field(default=None, alias="selectedAuthType")
    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    base_url: Optional[str] = Field(default=None, alias="baseURL")
    api_version: Optional[str] = Field(default=None, alias="apiVersion")
    timeout_seconds: Optional[float] = Field(default=None, gt=0, alias="timeoutSeconds")
    max_retries: Optional[int] = Field(default=None, ge=0, alias="maxRetries")
    sampling_params: Dict[str, float] = Field(default_factory=dict, alias="samplingParams")
    proxy: Optional[str] = None
    verify_tls: bool = Field(default=True, alias="verify")
    stream_flush_threshold: Optional[int] = Field(default=None, ge=1, alias="streamFlushThreshold")
    enable_logging: bool = Field(default=False, alias="enableLogging")


__all__ = ["Settings"]
