from __future__ import annotations

from contentgen_providers.base.http import TransportConfig, close_all_clients, get_httpx_client


def test_clients_are_shared_per_transport_and_timeout():
    a = get_httpx_client(TransportConfig(), 30.0)
    b = get_httpx_client(TransportConfig(), 30)
    c = get_httpx_client(TransportConfig(proxy="http://proxy:3128"), 30.0)
    d = get_httpx_client(TransportConfig(verify_tls=False), 30.0)
    assert a is b  # nosec B101
    assert len({id(a), id(c), id(d)}) == 3  # nosec B101


def test_environment_is_not_trusted_by_default(monkeypatch):
    monkeypatch.setenv("HTTPS_PROXY", "http://should-not-be-used:9")
    client = get_httpx_client(TransportConfig(), 5.0)
    assert client.trust_env is False  # nosec B101


def test_closed_clients_are_replaced():
    a = get_httpx_client(TransportConfig(), 10.0)
    close_all_clients()
    assert a.is_closed  # nosec B101
    b = get_httpx_client(TransportConfig(), 10.0)
    assert b is not a and not b.is_closed  # nosec B101
