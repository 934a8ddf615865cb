"""Tests for the edit/persist adapter and clipboard serialization."""

import json

from contentdesk.content.mapper import normalize
from contentdesk.content.models import (
    FlatMapSection,
    ListSection,
    PlainText,
    StructuredDocument,
    TextSection,
)
from contentdesk.content.parser import parse
from contentdesk.content.persist import clipboard_text, to_update_request


class TestToUpdateRequest:
    def test_edited_tweet_only(self):
        model = normalize({"id": 9, "Tweet": "old", "Trend": "AI pets", "Brand": "Acme"})
        model.set_text("tweet", "new tweet")
        assert to_update_request(model) == {"tweet": "new tweet"}

    def test_uses_snake_case_keys_for_legacy_records(self):
        model = normalize(
            {
                "id": 9,
                "Tweet": "t",
                "Facebook Post": "f",
                "Instagram Reel Script": "r",
                "TikTok Idea": "k",
            }
        )
        assert to_update_request(model) == {
            "tweet": "t",
            "facebook_post": "f",
            "instagram_reel_script": "r",
            "tiktok_idea": "k",
        }

    def test_read_only_fields_never_sent(self):
        model = normalize(
            {"id": 9, "tweet": "t", "trend": "x", "brand_name": "b", "generated_at": "2026-01-01"}
        )
        payload = to_update_request(model)
        for key in ("id", "trend", "brand_name", "Brand", "generated_at", "Timestamp"):
            assert key not in payload

    def test_unedited_structure_round_trips_unchanged(self):
        script = {"Visuals": ["b", "a"], "Audio": {"z": "1", "a": "2"}, "Caption": "c"}
        model = normalize({"id": 9, "instagram_reel_script": script})
        payload = to_update_request(model)
        assert payload["instagram_reel_script"] == script
        assert json.dumps(payload["instagram_reel_script"]) == json.dumps(script)

    def test_unedited_json_string_sent_as_received(self):
        encoded = '{"Hook": "x",  "Body": "y"}'
        model = normalize({"id": 9, "tiktok_idea": encoded})
        assert to_update_request(model) == {"tiktok_idea": encoded}

    def test_editing_structured_channel_downgrades_to_text(self):
        model = normalize({"id": 9, "facebook_post": {"Hook": "x"}})
        model.set_text("facebook_post", "flat post")
        assert to_update_request(model) == {"facebook_post": "flat post"}
        assert model.value("facebook_post") == PlainText(text="flat post")

    def test_edit_to_empty_string_is_sent(self):
        model = normalize({"id": 9, "tweet": "old"})
        model.set_text("tweet", "")
        assert to_update_request(model) == {"tweet": ""}

    def test_edit_adds_channel_missing_from_record(self):
        model = normalize({"id": 9, "tweet": "t"})
        model.set_text("linkedin_post", "hello network")
        assert to_update_request(model) == {"tweet": "t", "linkedin_post": "hello network"}


class TestClipboardText:
    def test_none(self):
        assert clipboard_text(None) == ""

    def test_plain_string(self):
        assert clipboard_text("Hello\nworld") == "Hello\nworld"

    def test_plain_text_value(self):
        assert clipboard_text(PlainText(text="hi")) == "hi"

    def test_json_looking_string_copied_verbatim(self):
        assert clipboard_text('{"a":1}') == '{"a":1}'

    def test_structured_document_is_indented_in_order(self):
        doc = StructuredDocument(
            sections={
                "Hook": TextSection(text="Did you know?"),
                "Beats": ListSection(items=["one", "two"]),
                "Audio": FlatMapSection(entries={"track": "lofi"}),
            }
        )
        text = clipboard_text(doc)
        assert "\n" in text
        assert text.index("Hook") < text.index("Did you know?") < text.index("Beats")
        assert text.index("Beats") < text.index("one") < text.index("two") < text.index("Audio")
        assert json.loads(text) == {
            "Hook": "Did you know?",
            "Beats": ["one", "two"],
            "Audio": {"track": "lofi"},
        }

    def test_raw_mapping_is_indented(self):
        assert clipboard_text({"a": ["b"]}) == '{\n  "a": [\n    "b"\n  ]\n}'

    def test_parsed_document_matches_raw_mapping(self):
        raw = {"Hook": "x", "Body": "y"}
        assert clipboard_text(parse(raw)) == clipboard_text(raw)
