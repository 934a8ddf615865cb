"""Payload parser — raw channel values to typed ContentValues.

Different prompt and model versions emit either free text or a JSON
outline for the same channel, sometimes as a decoded object and
sometimes as a JSON-encoded string.  ``parse`` never raises: anything
it cannot interpret as a JSON mapping degrades to PlainText, and the
user's original text always survives unchanged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from contentdesk.content.models import (
    FlatMapSection,
    ListSection,
    PlainText,
    StructuredDocument,
    TextSection,
)
from contentdesk.errors import DecodeFailure

logger = logging.getLogger(__name__)

_JSON_OPENERS = ("{", "[")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _decode(text: str) -> Any:
    """Strictly decode a JSON string.

    Raises:
        DecodeFailure: If the text is not valid standard JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, ValueError, RecursionError) as exc:
        raise DecodeFailure(str(exc)) from exc


def display_text(value: Any) -> str:
    """Coerce a decoded value to the string shown for it.

    Strings pass through, ``None`` is empty, scalars use their JSON
    literal, and nested containers are shown as compact JSON.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, Mapping):
        value = dict(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list | tuple)


def _to_document(decoded: Mapping[Any, Any]) -> StructuredDocument:
    sections = {}
    for key, value in decoded.items():
        title = display_text(key)
        if _is_sequence(value):
            sections[title] = ListSection(items=[display_text(item) for item in value])
        elif isinstance(value, Mapping):
            sections[title] = FlatMapSection(
                entries={display_text(k): display_text(v) for k, v in value.items()}
            )
        else:
            sections[title] = TextSection(text=display_text(value))
    return StructuredDocument(sections=sections)


def _to_plain(decoded: Any) -> PlainText:
    """Stable textual rendering of a decoded value that is not a mapping."""
    if _is_sequence(decoded):
        try:
            return PlainText(text=json.dumps(list(decoded), indent=2, ensure_ascii=False))
        except (TypeError, ValueError):
            return PlainText(text=str(decoded))
    return PlainText(text=display_text(decoded))


def parse(value: Any) -> PlainText | StructuredDocument:
    """Interpret a channel value as PlainText or a StructuredDocument.

    Already-typed values pass through untouched, so ``parse`` is
    idempotent.  Strings are decoded only when their first
    non-whitespace character opens a JSON object or array.
    """
    if value is None:
        return PlainText(text="")
    if isinstance(value, PlainText | StructuredDocument):
        return value

    if isinstance(value, str):
        if not value.strip().startswith(_JSON_OPENERS):
            return PlainText(text=value)
        try:
            decoded = _decode(value)
        except DecodeFailure as exc:
            logger.debug("Treating malformed JSON payload as plain text: %s", exc)
            return PlainText(text=value)
    else:
        decoded = value

    if isinstance(decoded, Mapping):
        return _to_document(decoded)
    return _to_plain(decoded)
