"""Managed aiohttp client session."""

import typing as t
from types import TracebackType

import aiohttp

from ...domain.exceptions import ClientNotInitialisedError
from .factories import create_secure_connector


class AiohttpClient:
    """Owns (or borrows) an ``aiohttp.ClientSession``.

    When a session is provided the client never closes it; otherwise a
    session with a certifi-backed connector is created on ``open()`` and
    closed on ``close()``.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout

    async def open(self) -> None:
        """Create the session if none exists yet. Idempotent."""
        if self._session is not None:
            return
        client_timeout = (
            aiohttp.ClientTimeout(total=self._timeout)
            if self._timeout is not None
            else None
        )
        kwargs: dict[str, t.Any] = {"connector": create_secure_connector()}
        if client_timeout is not None:
            kwargs["timeout"] = client_timeout
        self._session = aiohttp.ClientSession(**kwargs)

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise ClientNotInitialisedError(
                "HTTP client not initialised. Use 'async with AiohttpClient()' "
                "or call 'await client.open()' first."
            )
        return self._session

    def get(self, url: str, **kwargs: t.Any) -> t.Any:
        """Start a GET request; use the result as an async context manager."""
        return self.session.get(url, **kwargs)

    def post(self, url: str, **kwargs: t.Any) -> t.Any:
        """Start a POST request; use the result as an async context manager."""
        return self.session.post(url, **kwargs)

    async def __aenter__(self) -> "AiohttpClient":
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
