"""Content domain — normalization, parsing, rendering and persistence.

Raw records from any producer version pass through ``normalize`` into a
CanonicalContentModel; channel values are interpreted by ``parse``,
drawn by ``render``, and written back by ``to_update_request``.
"""

from contentdesk.content.mapper import normalize
from contentdesk.content.models import (
    CHANNELS,
    CanonicalContentModel,
    Channel,
    ChannelSpec,
    FlatMapSection,
    ListSection,
    PlainText,
    StructuredDocument,
    TextSection,
)
from contentdesk.content.parser import parse
from contentdesk.content.persist import clipboard_text, to_update_request
from contentdesk.content.renderer import render, render_text
from contentdesk.content.session import EditSession

__all__ = [
    "CHANNELS",
    "CanonicalContentModel",
    "Channel",
    "ChannelSpec",
    "EditSession",
    "FlatMapSection",
    "ListSection",
    "PlainText",
    "StructuredDocument",
    "TextSection",
    "clipboard_text",
    "normalize",
    "parse",
    "render",
    "render_text",
    "to_update_request",
]
