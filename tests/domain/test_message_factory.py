"""
Tests for the outgoing envelope -> WhatsApp wire message translation.
"""

import pytest
from pydantic import ValidationError

from wachannel.domain.factories.message_factory import (
    DEFAULT_LIST_LABEL,
    EMPTY_LIST_TEXT,
    TranslationContext,
    UnsupportedAttachmentTypeError,
    UnsupportedFormatError,
    WhatsAppMessageFactory,
    to_media_type,
    translate,
    truncate,
)
from wachannel.domain.models.attachment import Attachment
from wachannel.messaging.whatsapp.models import (
    InteractiveMessage,
    MediaMessage,
    MediaType,
    TextMessage,
)
from wachannel.schemas.core.envelope import BlockOptions, ListOptions, TextEnvelope


def resolve_url(attachment) -> str:
    return f"https://files.example.com/attachments/{attachment.id}"


@pytest.fixture
def factory() -> WhatsAppMessageFactory:
    return WhatsAppMessageFactory()


@pytest.fixture
def context() -> TranslationContext:
    return TranslationContext(url_resolver=resolve_url)


def attachment_envelope(file_type: str, name: str = "report.pdf", mime: str = "application/pdf"):
    return {
        "format": "attachment",
        "message": {
            "attachment": {
                "type": file_type,
                "payload": {"id": "att-1", "name": name, "type": mime, "size": 2048},
            },
            "quickReplies": [],
        },
    }


class TestTextAndReplies:
    def test_text_envelope(self, factory):
        wire = factory.translate({"format": "text", "message": {"text": "Hello!"}})

        assert isinstance(wire, TextMessage)
        assert wire.to_payload() == {"type": "text", "text": {"body": "Hello!"}}

    def test_envelope_model_passes_through(self, factory):
        envelope = TextEnvelope(message={"text": "Hi"})

        assert factory.translate(envelope).text.body == "Hi"

    def test_quick_replies_become_reply_buttons(self, factory):
        wire = factory.translate(
            {
                "format": "quickReplies",
                "message": {
                    "text": "Pick one",
                    "quickReplies": [
                        {"content_type": "text", "title": "Yes", "payload": "YES"},
                        {"content_type": "text", "title": "No", "payload": "NO"},
                    ],
                },
            }
        )

        assert isinstance(wire, InteractiveMessage)
        assert wire.to_payload() == {
            "type": "interactive",
            "interactive": {
                "type": "button",
                "body": {"text": "Pick one"},
                "action": {
                    "buttons": [
                        {"type": "reply", "reply": {"id": "YES", "title": "Yes"}},
                        {"type": "reply", "reply": {"id": "NO", "title": "No"}},
                    ]
                },
            },
        }

    def test_buttons_keep_only_postback_buttons(self, factory):
        wire = factory.translate(
            {
                "format": "buttons",
                "message": {
                    "text": "Menu",
                    "buttons": [
                        {"type": "postback", "title": "Order", "payload": "ORDER"},
                        {"type": "web_url", "title": "Site", "url": "https://example.com"},
                    ],
                },
            }
        )

        buttons = wire.interactive.action.buttons
        assert [(b.reply.id, b.reply.title) for b in buttons] == [("ORDER", "Order")]

    def test_buttons_without_postbacks_fall_back_to_text(self, factory):
        wire = factory.translate(
            {
                "format": "buttons",
                "message": {
                    "text": "Visit us",
                    "buttons": [
                        {"type": "web_url", "title": "Site", "url": "https://example.com"}
                    ],
                },
            }
        )

        assert isinstance(wire, TextMessage)
        assert wire.text.body == "Visit us"


class TestLists:
    def list_envelope(self, elements, buttons=None, message_format="list"):
        return {
            "format": message_format,
            "message": {
                "options": {"display": "list", "buttons": buttons or [], "fields": {}},
                "elements": elements,
            },
        }

    def test_list_rows_use_canonical_payload(self, factory):
        wire = factory.translate(
            self.list_envelope(
                [
                    {"id": "p1", "title": "Pizza", "postback": "ORDER_PIZZA"},
                    {"id": "p2", "title": "Pasta", "subtitle": "Fresh every day"},
                ],
                buttons=[{"type": "postback", "title": "Browse", "payload": "MORE"}],
            )
        )

        interactive = wire.interactive
        rows = interactive.action.sections[0].rows
        assert interactive.type.value == "list"
        assert interactive.action.button == "Browse"
        assert interactive.body.text == 'Tap "Browse" to browse the available options.'
        assert [(r.id, r.title, r.description) for r in rows] == [
            ("ORDER_PIZZA", "Pizza", None),
            ("p2", "Pasta", "Fresh every day"),
        ]

    def test_list_label_defaults_without_buttons(self, factory):
        wire = factory.translate(self.list_envelope([{"id": "a", "title": "A"}]))

        assert wire.interactive.action.button == DEFAULT_LIST_LABEL

    def test_long_descriptions_are_truncated(self, factory):
        wire = factory.translate(
            self.list_envelope([{"id": "a", "title": "A", "subtitle": "x" * 100}])
        )

        description = wire.interactive.action.sections[0].rows[0].description
        assert len(description) == 72
        assert description.endswith("...")

    def test_carousel_renders_as_list(self, factory):
        wire = factory.translate(
            self.list_envelope([{"id": "a", "title": "A"}], message_format="carousel")
        )

        assert wire.interactive.type.value == "list"

    @pytest.mark.parametrize("message_format", ["list", "carousel"])
    def test_empty_elements_fall_back_to_text(self, factory, message_format):
        wire = factory.translate(self.list_envelope([], message_format=message_format))

        assert isinstance(wire, TextMessage)
        assert wire.text.body == EMPTY_LIST_TEXT

    def test_label_from_block_options(self, factory):
        options = BlockOptions(
            content=ListOptions(
                buttons=[{"type": "postback", "title": "Menu", "payload": "MENU"}]
            )
        )

        wire = factory.translate(
            self.list_envelope([{"id": "a", "title": "A"}]),
            TranslationContext(options=options),
        )

        assert wire.interactive.action.button == "Menu"

    def test_envelope_buttons_win_over_block_options(self, factory):
        options = BlockOptions(
            content=ListOptions(
                buttons=[{"type": "postback", "title": "Menu", "payload": "MENU"}]
            )
        )

        wire = factory.translate(
            self.list_envelope(
                [{"id": "a", "title": "A"}],
                buttons=[{"type": "postback", "title": "Browse", "payload": "MORE"}],
            ),
            TranslationContext(options=options),
        )

        assert wire.interactive.action.button == "Browse"

    @pytest.mark.parametrize(
        ("length", "expected"),
        [(72, "x" * 72), (73, "x" * 69 + "...")],
    )
    def test_description_limit_boundary(self, factory, length, expected):
        wire = factory.translate(
            self.list_envelope([{"id": "a", "title": "A", "subtitle": "x" * length}])
        )

        assert wire.interactive.action.sections[0].rows[0].description == expected


class TestAttachments:
    def test_image_has_link_and_caption(self, factory, context):
        wire = factory.translate(
            attachment_envelope("image", name="photo.jpg", mime="image/jpeg"), context
        )

        assert isinstance(wire, MediaMessage)
        assert wire.to_payload() == {
            "type": "image",
            "image": {
                "link": "https://files.example.com/attachments/att-1",
                "caption": "photo.jpg",
            },
        }

    def test_file_becomes_document_with_filename(self, factory, context):
        wire = factory.translate(attachment_envelope("file"), context)

        assert wire.type == "document"
        assert wire.document.filename == "report.pdf"
        assert wire.document.caption == "report.pdf"

    def test_audio_carries_link_only(self, factory, context):
        wire = factory.translate(
            attachment_envelope("audio", name="voice.ogg", mime="audio/ogg"), context
        )

        assert wire.to_payload()["audio"] == {
            "link": "https://files.example.com/attachments/att-1"
        }

    @pytest.mark.parametrize(
        "file_type", ["unknown", "sticker", "location", "contact", "fallback"]
    )
    def test_unsupported_attachment_type_is_rejected(self, factory, context, file_type):
        with pytest.raises(UnsupportedAttachmentTypeError) as exc_info:
            factory.translate(attachment_envelope(file_type), context)

        assert exc_info.value.attachment_type == file_type

    def test_url_resolver_is_required(self, factory):
        with pytest.raises(ValueError, match="resolver"):
            factory.translate(attachment_envelope("image"))


class TestErrors:
    def test_unknown_format(self, factory):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            factory.translate({"format": "sticker_pack", "message": {}})

        assert exc_info.value.format == "sticker_pack"

    def test_invalid_message_for_known_format(self, factory):
        with pytest.raises(ValidationError):
            factory.translate({"format": "text", "message": {}})


def test_module_level_translate():
    wire = translate({"format": "text", "message": {"text": "ok"}})

    assert wire.to_payload()["text"]["body"] == "ok"


@pytest.mark.parametrize(
    ("file_type", "media_type"),
    [
        ("image", MediaType.IMAGE),
        ("video", MediaType.VIDEO),
        ("audio", MediaType.AUDIO),
        ("file", MediaType.DOCUMENT),
    ],
)
def test_to_media_type(file_type, media_type):
    assert to_media_type(file_type) == media_type


def test_truncate_keeps_short_text():
    assert truncate("short", 72) == "short"


def test_truncate_boundary():
    assert truncate("y" * 72, 72) == "y" * 72
    assert truncate("y" * 73, 72) == "y" * 69 + "..."


def test_translation_does_not_touch_the_envelope(factory, context):
    attachment = Attachment(id="att-9", name="a.png", type="image/png", size=1)
    envelope = {
        "format": "attachment",
        "message": {"attachment": {"type": "image", "payload": attachment}},
    }

    factory.translate(envelope, context)

    assert envelope["message"]["attachment"]["payload"] is attachment
