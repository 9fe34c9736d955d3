"""Resend HTTP API transport."""

import asyncio
import typing as t

import aiohttp

from ...domain.email import EmailMessage, SendResponse
from ...infrastructure.http import AiohttpClient
from .base import BaseTransport

DEFAULT_BASE_URL = "https://api.resend.com"


class ResendTransport(BaseTransport):
    """Sends messages through Resend's ``POST /emails`` endpoint.

    Implementation Decisions:
    - Provider rejections (non-2xx) are returned as ``SendResponse.error``
      built from Resend's ``{"name", "message", "statusCode"}`` error body
    - Network failures and timeouts are returned the same way, named after
      the exception class, so every failure reaches the caller in one shape
    - The HTTP client is injected and must already be open
    """

    def __init__(
        self,
        client: AiohttpClient,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._endpoint = f"{base_url.rstrip('/')}/emails"

    def _payload(self, message: EmailMessage) -> dict[str, t.Any]:
        return {
            "from": message.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
            "tags": [tag.model_dump() for tag in message.tags],
        }

    async def send(self, message: EmailMessage) -> SendResponse:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with self._client.post(
                self._endpoint, json=self._payload(message), headers=headers
            ) as response:
                body = await self._read_json(response)
                if 200 <= response.status < 300:
                    return SendResponse.ok(str(body.get("id", "")))
                return SendResponse.failed(
                    name=str(body.get("name") or "application_error"),
                    message=str(body.get("message") or response.reason or ""),
                    status_code=response.status,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return SendResponse.failed(name=type(e).__name__, message=str(e))

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse) -> dict[str, t.Any]:
        try:
            body = await response.json(content_type=None)
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
