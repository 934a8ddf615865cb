"""Tests for the field mapper — raw records to canonical models."""

import pytest

from contentdesk.content.mapper import normalize
from contentdesk.content.models import Channel, PlainText, StructuredDocument, TextSection
from contentdesk.errors import MissingRecordError


class TestKeyPrecedence:
    def test_snake_case_only(self):
        model = normalize({"id": 1, "tweet": "snake"})
        assert model.raw(Channel.TWEET) == "snake"

    def test_title_case_only(self):
        model = normalize({"id": 1, "Tweet": "title"})
        assert model.raw(Channel.TWEET) == "title"

    def test_snake_case_wins_when_both_present(self):
        model = normalize({"id": 1, "tweet": "snake", "Tweet": "title"})
        assert model.raw(Channel.TWEET) == "snake"

    def test_empty_string_counts_as_present(self):
        model = normalize({"id": 1, "facebook_post": "", "Facebook Post": "legacy"})
        assert model.raw(Channel.FACEBOOK_POST) == ""

    def test_null_falls_through_to_title_case(self):
        model = normalize({"id": 1, "tiktok_idea": None, "TikTok Idea": "legacy"})
        assert model.raw(Channel.TIKTOK_IDEA) == "legacy"

    @pytest.mark.parametrize(
        "channel, legacy_key",
        [
            (Channel.TWEET, "Tweet"),
            (Channel.FACEBOOK_POST, "Facebook Post"),
            (Channel.INSTAGRAM_REEL_SCRIPT, "Instagram Reel Script"),
            (Channel.TIKTOK_IDEA, "TikTok Idea"),
            (Channel.INSTAGRAM_CAPTION, "Instagram Caption"),
            (Channel.LINKEDIN_POST, "LinkedIn Post"),
        ],
    )
    def test_every_channel_accepts_legacy_key(self, channel, legacy_key):
        model = normalize({"id": 1, legacy_key: "value"})
        assert model.raw(channel) == "value"

    def test_timestamp_precedence(self):
        assert normalize({"generated_at": "2026-01-02", "Timestamp": "x"}).generated_at == "2026-01-02"
        assert normalize({"Timestamp": "2025-12-31"}).generated_at == "2025-12-31"

    def test_trend_precedence(self):
        assert normalize({"trend": "AI pets", "Trend": "old"}).trend == "AI pets"
        assert normalize({"Trend": "Retro"}).trend == "Retro"

    def test_id_precedence(self):
        assert normalize({"id": "abc", "ID": "zzz"}).id == "abc"
        assert normalize({"ID": 42, "tweet": "x"}).id == 42


class TestCanonicalShape:
    def test_missing_channels_still_have_slots(self):
        model = normalize({"id": 7, "tweet": "Hi"})
        assert set(model.slots) == set(Channel)
        assert model.raw(Channel.LINKEDIN_POST) is None
        assert model.value(Channel.LINKEDIN_POST) == PlainText(text="")

    def test_structured_values_are_kept_as_received(self):
        outline = {"Hook": "Did you know?", "Body": "..."}
        model = normalize({"id": 7, "Facebook Post": outline})
        assert model.raw(Channel.FACEBOOK_POST) == outline

    def test_unknown_keys_are_ignored(self):
        model = normalize({"id": 7, "tweet": "Hi", "campaign": {"id": 3}})
        assert model.raw(Channel.TWEET) == "Hi"


class TestBrandLabel:
    def test_brand_name(self):
        assert normalize({"brand_name": "Acme"}).brand_label == "Acme"

    def test_title_case_brand(self):
        assert normalize({"Brand": "Globex"}).brand_label == "Globex"

    def test_embedded_brand_object(self):
        assert normalize({"brand": {"id": 3, "name": "Initech"}}).brand_label == "Initech"

    def test_default_placeholder(self):
        assert normalize({"id": 1}).brand_label == "Brand"

    def test_empty_brand_uses_placeholder(self):
        assert normalize({"id": 1, "brand_name": ""}).brand_label == "Brand"

    def test_custom_placeholder(self):
        assert normalize({"id": 1}, brand_placeholder="Unknown brand").brand_label == "Unknown brand"


class TestMissingRecord:
    @pytest.mark.parametrize("raw", [None, {}, [], "tweet"])
    def test_raises(self, raw):
        with pytest.raises(MissingRecordError):
            normalize(raw)


class TestScenario:
    def test_tweet_and_structured_facebook_post(self):
        raw = {"tweet": "Hi", "Facebook Post": {"Hook": "Did you know?", "Body": "..."}}
        model = normalize(raw)
        assert model.value(Channel.TWEET) == PlainText(text="Hi")
        assert model.value(Channel.FACEBOOK_POST) == StructuredDocument(
            sections={
                "Hook": TextSection(text="Did you know?"),
                "Body": TextSection(text="..."),
            }
        )
