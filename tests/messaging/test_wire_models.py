"""
Tests for outbound wire models that the translator does not build itself.
"""

import pytest
from pydantic import ValidationError

from wachannel.messaging.whatsapp.models import (
    ContactsMessage,
    LocationBody,
    LocationMessage,
    ReactionBody,
    ReactionMessage,
    Template,
    TemplateComponent,
    TemplateMessage,
)
from wachannel.messaging.whatsapp.models.basic_models import ReplyContext


def test_template_message_payload():
    message = TemplateMessage(
        template=Template(
            name="order_update",
            components=[
                TemplateComponent(
                    type="body", parameters=[{"type": "text", "text": "#1234"}]
                )
            ],
        )
    )

    assert message.to_payload() == {
        "type": "template",
        "template": {
            "name": "order_update",
            "language": {"code": "en_US"},
            "components": [
                {"type": "body", "parameters": [{"type": "text", "text": "#1234"}]}
            ],
        },
    }


def test_location_message_with_reply_context():
    message = LocationMessage(
        location=LocationBody(latitude=-23.55, longitude=-46.63, name="Office"),
        context=ReplyContext(message_id="wamid.IN1"),
    )

    assert message.to_payload() == {
        "type": "location",
        "context": {"message_id": "wamid.IN1"},
        "location": {"latitude": -23.55, "longitude": -46.63, "name": "Office"},
    }


def test_reaction_message():
    message = ReactionMessage(
        reaction=ReactionBody(message_id="wamid.IN1", emoji="\N{THUMBS UP SIGN}")
    )

    assert message.to_payload() == {
        "type": "reaction",
        "reaction": {"message_id": "wamid.IN1", "emoji": "\N{THUMBS UP SIGN}"},
    }


def test_location_bounds():
    with pytest.raises(ValidationError):
        LocationBody(latitude=91, longitude=0)


def test_contacts_message_requires_a_contact():
    with pytest.raises(ValidationError):
        ContactsMessage(contacts=[])


@pytest.mark.asyncio
async def test_client_sends_prebuilt_wire_message(fake_session, fake_response):
    from wachannel.messaging.whatsapp.client import GraphApiClient

    client = GraphApiClient(fake_session, "tok", base_url="https://graph.example.com")
    fake_session.queue(fake_response(json_data={"messages": [{"id": "wamid.T1"}]}))

    result = await client.send_message(
        TemplateMessage(template=Template(name="hello_world")), "PHONE1", "55"
    )

    assert result.message_id == "wamid.T1"
    assert fake_session.calls[0]["json"]["template"]["name"] == "hello_world"
