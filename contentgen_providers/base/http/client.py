"""Shared ``httpx.Client`` pool built from an explicit transport configuration.

Purpose:
    OpenAI-compatible generators hand the SDK an ``httpx.Client`` whose proxy
    and TLS behaviour come from :class:`TransportConfig`. Proxy and
    certificate settings are therefore per-session values, and the process
    environment is never modified to influence them.

External dependencies:
    - ``httpx`` for the synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached by the full transport key plus timeout, so sessions
      with identical transport settings share connections.
    - All clients are closed at interpreter exit via ``atexit``; tests may call
      :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import httpx


@dataclass(frozen=True)
class TransportConfig:
    """How HTTP requests leave the process.

    Attributes:
        proxy: Proxy URL used for every request, or ``None`` for a direct
            connection.
        verify_tls: Verify server certificates. Disable only for local
            inference servers with self-signed certificates.
        trust_env: Let httpx pick up ``HTTP(S)_PROXY`` / ``SSL_CERT_FILE``
            from the environment. Off by default so that an explicitly
            configured transport is the only source of proxy settings.
    """

    proxy: Optional[str] = None
    verify_tls: bool = True
    trust_env: bool = False


_ClientKey = Tuple[Optional[str], bool, bool, float]

_CLIENTS: Dict[_ClientKey, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(transport: TransportConfig, timeout_seconds: float) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for ``transport`` and ``timeout_seconds``.

    Thread-safe; per-key creation is guarded by a re-entrant lock.
    """
    key: _ClientKey = (transport.proxy, transport.verify_tls, transport.trust_env, float(timeout_seconds))
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(
            proxy=transport.proxy,
            verify=transport.verify_tls,
            trust_env=transport.trust_env,
            timeout=timeout_seconds,
        )
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and forget every pooled client."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["TransportConfig", "get_httpx_client", "close_all_clients"]
