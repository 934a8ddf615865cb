"""Field mapper — raw backend records to the canonical content model.

Producers have shipped the same record under different key spellings
(``tweet`` vs ``Tweet``, ``generated_at`` vs ``Timestamp``).  Each
canonical field has an ordered list of candidate keys; the first key
present on the record wins.  Resolution happens once, here, so nothing
downstream ever sees the raw spelling.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from contentdesk.content.models import (
    CHANNELS,
    DEFAULT_BRAND_LABEL,
    CanonicalContentModel,
    Channel,
    ChannelSlot,
)
from contentdesk.errors import MissingRecordError

logger = logging.getLogger(__name__)

ID_KEYS = ("id", "ID")
BRAND_KEYS = ("brand_name", "Brand")
TREND_KEYS = ("trend", "Trend")
TIMESTAMP_KEYS = ("generated_at", "Timestamp")

_MISSING = object()


def channel_keys(channel: Channel) -> tuple[str, str]:
    """Candidate keys for a channel: snake_case first, then Title Case."""
    return (channel.value, CHANNELS[channel].legacy_key)


def resolve(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the value of the first present key, or ``_MISSING``.

    An empty string counts as present; a missing key or ``None`` does not.
    """
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return _MISSING


def _known_keys() -> set[str]:
    keys = {*ID_KEYS, *BRAND_KEYS, *TREND_KEYS, *TIMESTAMP_KEYS, "brand"}
    for channel in CHANNELS:
        keys.update(channel_keys(channel))
    return keys


def _text_or_none(value: Any) -> str | None:
    if value is _MISSING:
        return None
    return value if isinstance(value, str) else str(value)


def _brand_label(raw: Mapping[str, Any], placeholder: str) -> str:
    label = resolve(raw, BRAND_KEYS)
    if label is _MISSING:
        # v2 records embed the brand as an object instead of a name
        embedded = raw.get("brand")
        if isinstance(embedded, Mapping) and embedded.get("name") is not None:
            label = embedded["name"]
    if label is _MISSING or label == "":
        return placeholder
    return str(label)


def normalize(
    raw: Mapping[str, Any] | None,
    *,
    brand_placeholder: str = DEFAULT_BRAND_LABEL,
) -> CanonicalContentModel:
    """Translate a raw content record into a CanonicalContentModel.

    Args:
        raw: The record as decoded from the backend.
        brand_placeholder: Label used when the record names no brand.

    Returns:
        A model with every channel slot present.

    Raises:
        MissingRecordError: If ``raw`` is missing, empty, or not a mapping.
    """
    if not isinstance(raw, Mapping) or not raw:
        raise MissingRecordError()

    unknown = sorted(set(raw) - _known_keys())
    if unknown:
        logger.debug("Ignoring unmapped record keys: %s", ", ".join(unknown))

    record_id = resolve(raw, ID_KEYS)
    slots: dict[Channel, ChannelSlot] = {}
    for channel in CHANNELS:
        value = resolve(raw, channel_keys(channel))
        slots[channel] = ChannelSlot(raw=None if value is _MISSING else value)

    return CanonicalContentModel(
        id=None if record_id is _MISSING else record_id,
        brand_label=_brand_label(raw, brand_placeholder),
        trend=_text_or_none(resolve(raw, TREND_KEYS)),
        generated_at=_text_or_none(resolve(raw, TIMESTAMP_KEYS)),
        slots=slots,
    )
