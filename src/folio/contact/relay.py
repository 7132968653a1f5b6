"""Message relay collaborators for the contact form."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Protocol

import httpx

from folio.config import DEFAULT_RESEND_API_URL
from folio.exceptions import RelayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OutgoingMessage:
    from_email: str
    to_email: str
    reply_to: str
    subject: str
    text: str


class MessageRelay(Protocol):
    def send(self, message: OutgoingMessage) -> None:
        """Deliver ``message`` or raise :class:`RelayError`."""
        ...


class ResendRelay:
    """Send messages through the Resend HTTP API. Failures are not retried."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_RESEND_API_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_url = api_url
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def __enter__(self) -> ResendRelay:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @staticmethod
    def payload(message: OutgoingMessage) -> dict[str, Any]:
        return {
            "from": message.from_email,
            "to": [message.to_email],
            "reply_to": message.reply_to,
            "subject": message.subject,
            "text": message.text,
        }

    def send(self, message: OutgoingMessage) -> None:
        try:
            response = self._client.post(self.api_url, json=self.payload(message), headers=self._headers)
        except httpx.HTTPError as exc:
            raise RelayError(str(exc) or type(exc).__name__) from exc

        if response.is_error:
            detail: Any = response.text
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                detail = data.get("message", detail)
            raise RelayError(str(detail), status_code=response.status_code)

        logger.debug("Relay accepted message for %s", message.to_email)
