import json
from typing import Any

from pydantic import BaseModel, Field

from webhook_receiver.core.errors import PayloadParseError

UNKNOWN_EVENT = "unknown_event"
NO_EMAIL = "no_email"
RECEIVED = "received"


def _is_blank(value: Any) -> bool:
    # Only null, false, 0 and "" count as missing; [] and {} are kept
    if value is None or isinstance(value, (bool, int, float, str)):
        return not value
    return False


def _text(value: Any, fallback: str) -> str:
    if _is_blank(value):
        return fallback
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class WebhookRecord(BaseModel):
    """Row written to the webhooks table for one inbound request."""

    payload: Any = Field(..., description="Inbound body, stored verbatim")
    event: str
    email: str
    status: str = RECEIVED

    @classmethod
    def from_payload(cls, payload: Any) -> "WebhookRecord":
        if payload is None:
            raise PayloadParseError("Cannot read 'event_type' of a null payload")
        body = payload if isinstance(payload, dict) else {}
        customer = body.get("customer")
        email = customer.get("email") if isinstance(customer, dict) else None
        return cls(
            payload=payload,
            event=_text(body.get("event_type"), UNKNOWN_EVENT),
            email=_text(email, NO_EMAIL),
        )

    def as_row(self) -> dict[str, Any]:
        return {
            "payload": self.payload,
            "event": self.event,
            "email": self.email,
            "status": self.status,
        }


class WebhookAck(BaseModel):
    success: bool = True
    message: str = "Webhook processado"
    entryId: str | int | None


class WebhookFailure(BaseModel):
    success: bool = False
    message: str
