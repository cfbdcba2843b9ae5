"""Outbound inquiry email through the EmailJS REST API.

Delivery is at-most-once: a failed send is reported to the submitter and
not retried or stored anywhere else.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests  # type: ignore[import-untyped]

from .config import (
    EMAILJS_API_URL,
    EMAILJS_AUTOREPLY_TEMPLATE_ID,
    EMAILJS_PRIVATE_KEY,
    EMAILJS_PUBLIC_KEY,
    EMAILJS_SERVICE_ID,
    EMAILJS_TEMPLATE_ID,
    EMAILJS_TIMEOUT,
)
from .contact import Inquiry, build_autoreply_params, build_inquiry_params

__all__ = [
    "EmailJSSettings",
    "DeliveryResult",
    "EmailServiceNotConfigured",
    "InquiryDeliveryError",
    "send_template",
    "deliver_inquiry",
]

logger = logging.getLogger(__name__)


class EmailServiceNotConfigured(RuntimeError):
    """Service id, template id or public key is missing."""


class InquiryDeliveryError(RuntimeError):
    """The mail relay rejected the message or could not be reached."""


@dataclass(frozen=True)
class EmailJSSettings:
    service_id: str = ""
    template_id: str = ""
    public_key: str = ""
    autoreply_template_id: str = ""
    private_key: str = ""
    api_url: str = EMAILJS_API_URL
    timeout: float = EMAILJS_TIMEOUT

    @classmethod
    def from_config(cls) -> "EmailJSSettings":
        return cls(
            service_id=EMAILJS_SERVICE_ID,
            template_id=EMAILJS_TEMPLATE_ID,
            public_key=EMAILJS_PUBLIC_KEY,
            autoreply_template_id=EMAILJS_AUTOREPLY_TEMPLATE_ID,
            private_key=EMAILJS_PRIVATE_KEY,
        )

    @property
    def configured(self) -> bool:
        return bool(self.service_id and self.template_id and self.public_key)


@dataclass(frozen=True)
class DeliveryResult:
    autoreply_sent: bool = False


def send_template(
    template_id: str,
    template_params: Dict[str, Any],
    settings: EmailJSSettings,
    session: Optional[requests.Session] = None,
) -> None:
    """Send one templated email.

    Raises:
        InquiryDeliveryError: On a network error or a non-2xx response.
    """
    payload: Dict[str, Any] = {
        "service_id": settings.service_id,
        "template_id": template_id,
        "user_id": settings.public_key,
        "template_params": template_params,
    }
    if settings.private_key:
        payload["accessToken"] = settings.private_key

    http = session or requests
    try:
        resp = http.post(settings.api_url, json=payload, timeout=settings.timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        body = e.response.text[:200] if e.response is not None else ""
        raise InquiryDeliveryError(f"EmailJS returned HTTP {status}: {body}") from e
    except requests.exceptions.RequestException as e:
        raise InquiryDeliveryError(f"EmailJS request failed: {e}") from e


def deliver_inquiry(
    inquiry: Inquiry,
    settings: EmailJSSettings,
    session: Optional[requests.Session] = None,
) -> DeliveryResult:
    """Send the inquiry to the sales inbox, then the optional auto-reply.

    A failed auto-reply is logged and does not fail the inquiry.

    Raises:
        EmailServiceNotConfigured: If required EmailJS keys are missing.
        InquiryDeliveryError: If the main inquiry email could not be sent.
    """
    if not settings.configured:
        raise EmailServiceNotConfigured(
            "Email service is not configured. Please set EmailJS keys and try again."
        )

    send_template(settings.template_id, build_inquiry_params(inquiry), settings, session)

    autoreply_sent = False
    if settings.autoreply_template_id:
        try:
            send_template(
                settings.autoreply_template_id,
                build_autoreply_params(inquiry),
                settings,
                session,
            )
            autoreply_sent = True
        except InquiryDeliveryError:
            logger.exception("EmailJS auto-reply failed")

    return DeliveryResult(autoreply_sent=autoreply_sent)
