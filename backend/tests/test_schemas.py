import pytest

from webhook_receiver.core.errors import PayloadParseError
from webhook_receiver.schemas.ingest import WebhookAck, WebhookRecord


def test_record_from_purchase(purchase_payload):
    record = WebhookRecord.from_payload(purchase_payload)
    assert record.event == "purchase.approved"
    assert record.email == "a@b.com"
    assert record.status == "received"
    assert record.payload is purchase_payload


@pytest.mark.parametrize(
    "payload,event,email",
    [
        ({}, "unknown_event", "no_email"),
        ({"event_type": ""}, "unknown_event", "no_email"),
        ({"event_type": None, "customer": {"email": ""}}, "unknown_event", "no_email"),
        ({"customer": "a@b.com"}, "unknown_event", "no_email"),
        ({"event_type": 42, "customer": {"email": "x@y.z"}}, "42", "x@y.z"),
        ({"event_type": {"name": "refund"}}, '{"name": "refund"}', "no_email"),
        ({"event_type": [], "customer": {"email": {}}}, "[]", "{}"),
        ({"event_type": False, "customer": {"email": 0}}, "unknown_event", "no_email"),
        ("purchase.approved", "unknown_event", "no_email"),
    ],
)
def test_record_fallbacks(payload, event, email):
    record = WebhookRecord.from_payload(payload)
    assert record.event == event
    assert record.email == email
    assert record.payload == payload


def test_null_payload_is_rejected():
    with pytest.raises(PayloadParseError, match="null payload"):
        WebhookRecord.from_payload(None)


def test_record_row_keeps_extra_fields():
    payload = {"event_type": "subscription.canceled", "subscription": {"id": "sub_1"}}
    row = WebhookRecord.from_payload(payload).as_row()
    assert set(row) == {"payload", "event", "email", "status"}
    assert row["payload"]["subscription"] == {"id": "sub_1"}


@pytest.mark.parametrize("entry_id", [17, "0b6f3c1e-7a55-4e0f-9a3b-2f5b8d6f1c20"])
def test_ack_keeps_entry_id_type(entry_id):
    assert WebhookAck(entryId=entry_id).model_dump() == {
        "success": True,
        "message": "Webhook processado",
        "entryId": entry_id,
    }
