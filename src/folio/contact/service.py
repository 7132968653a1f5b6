"""Contact form request handling.

``ContactService.handle`` is framework-agnostic: it takes the request headers
and the decoded JSON body and returns the status code and JSON payload to
send back. The response always carries ``ok`` and, on failure, ``error``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING, Any

from folio.contact.payload import ContactSubmission
from folio.contact.rate_limit import RateLimiter, SlidingWindowRateLimiter
from folio.contact.relay import MessageRelay, OutgoingMessage, ResendRelay
from folio.exceptions import RelayNotConfiguredError

if TYPE_CHECKING:
    from folio.config import ContactSettings, FolioConfig

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong sending your message."
RATE_LIMITED = "Too many requests. Please try again shortly."
INCOMPLETE = "Please fill in name, email, and message."
INVALID_EMAIL = "Please enter a valid email."
INVALID_BODY = "Invalid request body."


@dataclass(frozen=True, slots=True)
class ContactResponse:
    status_code: int
    ok: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ok": self.ok}
        if self.error is not None:
            data["error"] = self.error
        return data


def client_ip(headers: Mapping[str, str]) -> str:
    """Best-effort client address behind proxies."""
    lowered = {key.lower(): value for key, value in headers.items()}
    forwarded = lowered.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or "unknown"
    real_ip = lowered.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return "unknown"


def compose_message(submission: ContactSubmission, ip: str, *, from_email: str, to_email: str) -> OutgoingMessage:
    subject = f"Portfolio message from {submission.name}"
    if submission.subject:
        subject = f"{subject}: {submission.subject}"
    text = "\n".join(
        [
            "New portfolio contact form submission",
            "",
            f"Name: {submission.name}",
            f"Email: {submission.email}",
            f"IP: {ip}",
            "",
            "Message:",
            submission.message,
        ]
    )
    return OutgoingMessage(
        from_email=from_email,
        to_email=to_email,
        reply_to=submission.email,
        subject=subject,
        text=text,
    )


class ContactService:
    """Validate, rate limit and relay contact form submissions."""

    def __init__(
        self,
        settings: ContactSettings,
        *,
        relay: MessageRelay | None = None,
        limiter: RateLimiter | None = None,
    ) -> None:
        self.settings = settings
        self._relay = relay
        self._owns_relay = False
        self.limiter = limiter or SlidingWindowRateLimiter(
            settings.rate_limit_max,
            settings.rate_limit_window_seconds,
            max_clients=settings.rate_limit_max_clients,
        )

    @classmethod
    def from_config(cls, config: FolioConfig) -> ContactService:
        return cls(config.contact)

    def __enter__(self) -> ContactService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the Resend relay this service built itself. Injected relays are left open."""
        if self._owns_relay and isinstance(self._relay, ResendRelay):
            self._relay.close()
            self._relay = None
            self._owns_relay = False

    def _relay_or_raise(self) -> MessageRelay:
        if self._relay is None:
            if not self.settings.resend_api_key:
                raise RelayNotConfiguredError("FOLIO_CONTACT__RESEND_API_KEY")
            self._relay = ResendRelay(
                self.settings.resend_api_key,
                api_url=self.settings.api_url,
                timeout=self.settings.timeout_seconds,
            )
            self._owns_relay = True
        return self._relay

    def _addresses(self) -> tuple[str, str]:
        if not self.settings.to_email:
            raise RelayNotConfiguredError("FOLIO_CONTACT__TO_EMAIL")
        if not self.settings.from_email:
            raise RelayNotConfiguredError("FOLIO_CONTACT__FROM_EMAIL")
        return self.settings.from_email, self.settings.to_email

    def handle(self, headers: Mapping[str, str], body: Any) -> ContactResponse:
        try:
            relay = self._relay_or_raise()
            from_email, to_email = self._addresses()
        except RelayNotConfiguredError as exc:
            logger.error("Contact relay is not configured: %s", exc)
            return ContactResponse(500, ok=False, error=str(exc))

        ip = client_ip(headers)
        if not self.limiter.allow(ip):
            logger.warning("Contact submission rate limited for %s", ip)
            return ContactResponse(429, ok=False, error=RATE_LIMITED)

        if isinstance(body, str | bytes):
            try:
                body = json.loads(body)
            except ValueError:
                return ContactResponse(400, ok=False, error=INVALID_BODY)
        if not isinstance(body, Mapping):
            return ContactResponse(400, ok=False, error=INVALID_BODY)

        submission = ContactSubmission.from_body(body)
        if submission.is_spam:
            # Pretend success so bots learn nothing.
            logger.info("Dropped honeypot submission from %s", ip)
            return ContactResponse(200, ok=True)
        if not submission.is_complete:
            return ContactResponse(400, ok=False, error=INCOMPLETE)
        if not submission.has_valid_email:
            return ContactResponse(400, ok=False, error=INVALID_EMAIL)

        message = compose_message(submission, ip, from_email=from_email, to_email=to_email)
        try:
            relay.send(message)
        except Exception:
            logger.exception("Failed to relay contact message from %s", ip)
            return ContactResponse(500, ok=False, error=GENERIC_FAILURE)

        logger.info("Relayed contact message from %s", ip)
        return ContactResponse(200, ok=True)
