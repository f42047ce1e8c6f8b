"""
Email dispatch endpoint logic, independent of the web framework.

`handle_email_request` takes the HTTP method and raw body and returns an
`EmailResponse`; the Flask view in `eyesentry.mailer.app` only translates it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import resend

from eyesentry.config import DEFAULT_EMAIL_FROM

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("to", "subject", "html")
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class EmailError(Exception):
    status_code = 500
    default_message = "Failed to send email"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class MethodNotAllowed(EmailError):
    status_code = 405
    default_message = "Method not allowed"


class ValidationError(EmailError):
    status_code = 400
    default_message = "Missing required fields: to, subject, and html are required"


class SendFailure(EmailError):
    status_code = 500


@dataclass
class EmailMessage:
    to: Any
    subject: str
    html: str


@dataclass
class EmailResponse:
    status: int
    payload: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))


class EmailSender(Protocol):
    def send(self, message: EmailMessage) -> Any:
        ...


class ResendSender:
    """Sends through the Resend API; provider errors surface as SendFailure."""

    def __init__(self, api_key: Optional[str], sender: str = DEFAULT_EMAIL_FROM):
        self.api_key = api_key
        self.sender = sender

    def send(self, message: EmailMessage) -> Any:
        if not self.api_key:
            raise SendFailure("RESEND_API_KEY is not configured")
        resend.api_key = self.api_key
        try:
            return resend.Emails.send(
                {
                    "from": self.sender,
                    "to": message.to,
                    "subject": message.subject,
                    "html": message.html,
                }
            )
        except Exception as exc:
            raise SendFailure(str(exc) or None) from exc


def parse_message(body: Optional[bytes]) -> EmailMessage:
    try:
        data = json.loads(body or b"")
    except (TypeError, ValueError) as exc:
        raise ValidationError("Request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    if any(not data.get(name) for name in REQUIRED_FIELDS):
        raise ValidationError()
    return EmailMessage(to=data["to"], subject=data["subject"], html=data["html"])


def handle_email_request(method: str, body: Optional[bytes], sender: EmailSender) -> EmailResponse:
    method = method.upper()
    if method == "OPTIONS":
        return EmailResponse(status=200, headers=dict(PREFLIGHT_HEADERS))

    try:
        if method != "POST":
            raise MethodNotAllowed()
        message = parse_message(body)
        data = sender.send(message)
    except EmailError as exc:
        if exc.status_code >= 500:
            logger.error("Error sending email: %s", exc.message)
        else:
            logger.info("Rejected email request (%s): %s", exc.status_code, exc.message)
        return EmailResponse(status=exc.status_code, payload={"success": False, "error": exc.message})

    logger.info("Email sent to %s", message.to)
    return EmailResponse(status=200, payload={"success": True, "data": data})
