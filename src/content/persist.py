"""Edit/persist adapter — canonical model back to backend payloads.

Saves project channel slots only, always under the snake_case keys the
backend expects.  Unedited channels go back exactly as they arrived, so
a structured outline keeps its nesting and section order.  An edited
channel is sent as the flat text the user typed, even if it used to be
structured.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol

from contentdesk.content.models import (
    CHANNELS,
    CanonicalContentModel,
    PlainText,
    StructuredDocument,
)

UpdatePayload = dict[str, Any]


class Clipboard(Protocol):
    """Anything that can receive copied text."""

    def write(self, text: str, /) -> Any: ...


def to_update_request(model: CanonicalContentModel) -> UpdatePayload:
    """Build the body of a content update request.

    Channels that were absent on the raw record and never edited are
    omitted.  The record identifier belongs in the endpoint path and is
    never part of the body.
    """
    payload: UpdatePayload = {}
    for channel in CHANNELS:
        slot = model.slots[channel]
        if slot.edited:
            payload[channel.value] = "" if slot.raw is None else str(slot.raw)
        elif slot.raw is not None:
            payload[channel.value] = slot.raw
    return payload


def clipboard_text(value: Any) -> str:
    """Serialize a value for the clipboard.

    Structured values become indented, human-readable JSON with their
    sections in stored order; text is copied verbatim.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, PlainText):
        return value.text
    if isinstance(value, StructuredDocument):
        value = value.to_data()
    elif isinstance(value, Mapping):
        value = dict(value)
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)
