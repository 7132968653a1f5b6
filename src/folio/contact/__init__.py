"""Contact form relay: submission parsing, rate limiting and delivery."""

from folio.contact.payload import ContactSubmission, clean, looks_like_email
from folio.contact.rate_limit import RateLimiter, SlidingWindowRateLimiter
from folio.contact.relay import MessageRelay, OutgoingMessage, ResendRelay
from folio.contact.service import ContactResponse, ContactService, client_ip, compose_message

__all__ = [
    "ContactResponse",
    "ContactService",
    "ContactSubmission",
    "MessageRelay",
    "OutgoingMessage",
    "RateLimiter",
    "ResendRelay",
    "SlidingWindowRateLimiter",
    "clean",
    "client_ip",
    "compose_message",
    "looks_like_email",
]
