"""HTTP transport helpers."""

from .client import TransportConfig, get_httpx_client, close_all_clients

__all__ = ["TransportConfig", "get_httpx_client", "close_all_clients"]
