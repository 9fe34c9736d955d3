"""Factories for TLS-verified aiohttp connectors."""

import ssl as ssl_module
import typing as t

import aiohttp
import certifi


def create_ssl_context() -> ssl_module.SSLContext:
    """Create an SSL context that trusts certifi's CA bundle.

    Avoids depending on the host's certificate store, which is missing or
    stale on some minimal container images.
    """
    return ssl_module.create_default_context(cafile=certifi.where())


def create_secure_connector(
    ssl: ssl_module.SSLContext | None = None,
    **connector_kwargs: t.Any,
) -> aiohttp.TCPConnector:
    """Create a TCPConnector with certificate verification enabled.

    Must be called from within a running event loop.

    Args:
        ssl: SSL context to use. Defaults to ``create_ssl_context()``.
        connector_kwargs: Extra keyword arguments for ``aiohttp.TCPConnector``
    """
    context = ssl if ssl is not None else create_ssl_context()
    return aiohttp.TCPConnector(ssl=context, **connector_kwargs)
