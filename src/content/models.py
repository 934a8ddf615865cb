"""Content domain models — pure Pydantic v2 data types.

A generated content record carries one value per social channel.  Raw
records arrive in several shapes; once normalized they become a
CanonicalContentModel whose channel slots are always present.  Channel
values are interpreted as a tagged ContentValue: either PlainText or a
StructuredDocument of ordered sections.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_BRAND_LABEL = "Brand"


class Channel(StrEnum):
    """Canonical content channels, keyed by their backend field name."""

    TWEET = "tweet"
    FACEBOOK_POST = "facebook_post"
    INSTAGRAM_REEL_SCRIPT = "instagram_reel_script"
    TIKTOK_IDEA = "tiktok_idea"
    INSTAGRAM_CAPTION = "instagram_caption"
    LINKEDIN_POST = "linkedin_post"


class ChannelSpec(BaseModel):
    """Registry entry describing how a channel is keyed and edited."""

    model_config = ConfigDict(frozen=True)

    channel: Channel
    legacy_key: str  # Title Case key used by older producers
    label: str
    textarea: bool = True
    char_limit: int | None = None


CHANNELS: dict[Channel, ChannelSpec] = {
    Channel.TWEET: ChannelSpec(
        channel=Channel.TWEET, legacy_key="Tweet", label="Twitter Content", char_limit=280
    ),
    Channel.FACEBOOK_POST: ChannelSpec(
        channel=Channel.FACEBOOK_POST, legacy_key="Facebook Post", label="Facebook Post"
    ),
    Channel.INSTAGRAM_REEL_SCRIPT: ChannelSpec(
        channel=Channel.INSTAGRAM_REEL_SCRIPT,
        legacy_key="Instagram Reel Script",
        label="Instagram Reel Script",
        textarea=False,
    ),
    Channel.TIKTOK_IDEA: ChannelSpec(
        channel=Channel.TIKTOK_IDEA, legacy_key="TikTok Idea", label="TikTok Idea", textarea=False
    ),
    Channel.INSTAGRAM_CAPTION: ChannelSpec(
        channel=Channel.INSTAGRAM_CAPTION,
        legacy_key="Instagram Caption",
        label="Instagram Caption",
    ),
    Channel.LINKEDIN_POST: ChannelSpec(
        channel=Channel.LINKEDIN_POST, legacy_key="LinkedIn Post", label="LinkedIn Post"
    ),
}


# ---------------------------------------------------------------------------
# Content values
# ---------------------------------------------------------------------------


class TextSection(BaseModel):
    """A section whose body is a single paragraph."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class ListSection(BaseModel):
    """A section whose body is an ordered list of items."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    items: list[str] = Field(default_factory=list)


class FlatMapSection(BaseModel):
    """A section whose body is one level of key/value pairs."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["flat_map"] = "flat_map"
    entries: dict[str, str] = Field(default_factory=dict)


SectionBody = Annotated[TextSection | ListSection | FlatMapSection, Field(discriminator="kind")]


class PlainText(BaseModel):
    """Free-text content, kept exactly as stored."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain_text"] = "plain_text"
    text: str = ""


class StructuredDocument(BaseModel):
    """Decoded multi-section content; section order is authorial order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    sections: dict[str, SectionBody] = Field(default_factory=dict)

    def to_data(self) -> dict[str, Any]:
        """Return the sections as plain JSON-compatible data, in order."""
        data: dict[str, Any] = {}
        for title, body in self.sections.items():
            if isinstance(body, ListSection):
                data[title] = list(body.items)
            elif isinstance(body, FlatMapSection):
                data[title] = dict(body.entries)
            else:
                data[title] = body.text
        return data


ContentValue = Annotated[PlainText | StructuredDocument, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Canonical model
# ---------------------------------------------------------------------------


class ChannelSlot(BaseModel):
    """One channel's value as received, plus whether the user replaced it."""

    raw: Any = None
    edited: bool = False


class CanonicalContentModel(BaseModel):
    """Normalized, editable form of a generated content record.

    Every channel in ``CHANNELS`` has a slot, whatever keys the raw record
    carried.  ``brand_label``, ``trend`` and ``generated_at`` are read-only
    display fields and are never written back.
    """

    id: str | int | None = None
    brand_label: str = DEFAULT_BRAND_LABEL
    trend: str | None = None
    generated_at: str | None = None
    slots: dict[Channel, ChannelSlot] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _fill_slots(self) -> CanonicalContentModel:
        for channel in CHANNELS:
            self.slots.setdefault(channel, ChannelSlot())
        return self

    def raw(self, channel: Channel | str) -> Any:
        """Return the slot's current raw value (edited text or as received)."""
        return self.slots[Channel(channel)].raw

    def value(self, channel: Channel | str) -> PlainText | StructuredDocument:
        """Interpret the slot's current value as a ContentValue."""
        from contentdesk.content.parser import parse

        return parse(self.raw(channel))

    def set_text(self, channel: Channel | str, text: str) -> None:
        """Replace a channel with user-edited flat text."""
        slot = self.slots[Channel(channel)]
        slot.raw = text
        slot.edited = True

    def is_edited(self, channel: Channel | str) -> bool:
        return self.slots[Channel(channel)].edited

    @property
    def generated_date(self) -> datetime | None:
        """Parse ``generated_at`` as an ISO timestamp, or None if unparseable."""
        if not self.generated_at:
            return None
        try:
            return datetime.fromisoformat(self.generated_at.replace("Z", "+00:00"))
        except ValueError:
            return None
