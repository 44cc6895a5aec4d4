"""
Tests for notification container parsing and unit extraction.
"""

import pytest
from pydantic import ValidationError

from wachannel.processors.whatsapp_processor import (
    MessageUnit,
    StatusUnit,
    WebhookShapeError,
    WhatsAppWebhookProcessor,
)


@pytest.fixture
def processor() -> WhatsAppWebhookProcessor:
    return WhatsAppWebhookProcessor()


def test_units_follow_payload_order(processor, notification, message, status):
    payload = notification(
        messages=[
            message("text", {"body": "1"}, msg_id="m1"),
            message("text", {"body": "2"}, msg_id="m2"),
        ],
        statuses=[status("delivered", msg_id="s1")],
    )
    payload["entry"].append(
        notification(statuses=[status("read", msg_id="s2")])["entry"][0]
    )

    webhook = processor.parse_webhook_container(payload)
    units = [(raw.kind, raw.data["id"]) for raw in processor.iter_raw_units(webhook)]

    assert units == [("message", "m1"), ("message", "m2"), ("status", "s1"), ("status", "s2")]


def test_create_unit(processor, notification, message, status):
    webhook = processor.parse_webhook_container(
        notification(messages=[message("text", {"body": "hi"})], statuses=[status("read")])
    )
    message_raw, status_raw = list(processor.iter_raw_units(webhook))

    assert isinstance(processor.create_unit(message_raw), MessageUnit)
    assert isinstance(processor.create_unit(status_raw), StatusUnit)


def test_malformed_unit_only_fails_its_own_parse(processor, notification, message):
    webhook = processor.parse_webhook_container(
        notification(
            messages=[
                {"id": "broken", "type": "text"},
                message("text", {"body": "fine"}, msg_id="ok"),
            ]
        )
    )
    broken, fine = list(processor.iter_raw_units(webhook))

    with pytest.raises(ValidationError):
        processor.create_unit(broken)
    assert processor.create_unit(fine).message.id == "ok"


def test_content_must_match_type_tag(processor, notification, message):
    data = message("text", {"body": "hi"})
    data["type"] = "image"
    webhook = processor.parse_webhook_container(notification(messages=[data]))

    with pytest.raises(ValidationError):
        processor.create_unit(next(iter(processor.iter_raw_units(webhook))))


def test_invalid_container_shape(processor):
    with pytest.raises(WebhookShapeError):
        processor.parse_webhook_container(
            {"object": "whatsapp_business_account", "entry": [{"changes": "nope"}]}
        )


def test_empty_arrays_yield_no_units(processor, notification):
    webhook = processor.parse_webhook_container(notification(messages=[], statuses=[]))

    assert list(processor.iter_raw_units(webhook)) == []
