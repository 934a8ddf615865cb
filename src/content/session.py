"""Edit session — the state owned by one content-editing view."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from contentdesk.content.mapper import normalize
from contentdesk.content.models import (
    CHANNELS,
    CanonicalContentModel,
    Channel,
    PlainText,
    StructuredDocument,
)
from contentdesk.content.persist import Clipboard, UpdatePayload, clipboard_text, to_update_request
from contentdesk.content.renderer import EMPTY_PLACEHOLDER, RenderNode, render
from contentdesk.errors import APIError, ReadOnlyChannelError, SaveFailure

logger = logging.getLogger(__name__)

COPIED_ACK_SECONDS = 2.0


class EditSession:
    """Holds the canonical model plus the view's transient flags.

    Only one session edits a given model, so nothing here is locked.
    A failed save leaves the model exactly as it was so the user can
    retry without re-deriving it.
    """

    def __init__(
        self,
        model: CanonicalContentModel,
        *,
        copied_ack_seconds: float = COPIED_ACK_SECONDS,
        empty_placeholder: str = EMPTY_PLACEHOLDER,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.model = model
        self.saving = False
        self._copied: Channel | None = None
        self._copied_at = 0.0
        self._ack_seconds = copied_ack_seconds
        self._placeholder = empty_placeholder
        self._clock = clock

    @classmethod
    def open(cls, raw: Mapping[str, Any] | None, config: Any = None, **kwargs: Any) -> EditSession:
        """Start a session from a raw record.

        Raises:
            MissingRecordError: If there is no record to edit.
        """
        if config is not None:
            kwargs.setdefault("copied_ack_seconds", config.editor.copied_ack_seconds)
            kwargs.setdefault("empty_placeholder", config.editor.empty_placeholder)
            model = normalize(raw, brand_placeholder=config.editor.brand_placeholder)
        else:
            model = normalize(raw)
        return cls(model, **kwargs)

    # ── Reading ──────────────────────────────────────────────────

    def value(self, channel: Channel | str) -> PlainText | StructuredDocument:
        return self.model.value(channel)

    def render(self, channel: Channel | str) -> RenderNode:
        return render(self.model.raw(channel), placeholder=self._placeholder)

    def char_count(self, channel: Channel | str) -> int:
        """Length of the channel's current text, as shown under a text area."""
        raw = self.model.raw(channel)
        return len(raw) if isinstance(raw, str) else 0

    def over_limit(self, channel: Channel | str) -> bool:
        limit = CHANNELS[Channel(channel)].char_limit
        return limit is not None and self.char_count(channel) > limit

    # ── Editing and copying ──────────────────────────────────────

    def edit(self, channel: Channel | str, text: str) -> None:
        """Replace a channel with flat text, downgrading any structure.

        Raises:
            ReadOnlyChannelError: If the channel has no text area (the
                script channels are copy-only).
        """
        spec = CHANNELS[Channel(channel)]
        if not spec.textarea:
            raise ReadOnlyChannelError(f"{spec.label} is copy-only and cannot be edited")
        self.model.set_text(channel, text)

    def copy(self, channel: Channel | str, clipboard: Clipboard) -> str:
        """Write the channel's current value to the clipboard."""
        text = clipboard_text(self.model.raw(channel))
        clipboard.write(text)
        self._copied = Channel(channel)
        self._copied_at = self._clock()
        return text

    def is_copied(self, channel: Channel | str) -> bool:
        """True while the "Copied!" acknowledgement should still show."""
        if self._copied != Channel(channel):
            return False
        return self._clock() - self._copied_at < self._ack_seconds

    # ── Saving ───────────────────────────────────────────────────

    def update_request(self) -> UpdatePayload:
        return to_update_request(self.model)

    def save(self, client: Any) -> Any:
        """Persist the edited channels with a single update request.

        Raises:
            SaveFailure: If the backend request fails for any reason.
        """
        if self.model.id is None:
            raise SaveFailure("Cannot save content without an id")
        payload = self.update_request()
        self.saving = True
        try:
            result = client.update_content(self.model.id, payload)
        except APIError as exc:
            logger.warning("Failed to save content %s: %s", self.model.id, exc)
            raise SaveFailure(cause=exc) from exc
        finally:
            self.saving = False
        logger.info("Saved content %s (%s)", self.model.id, ", ".join(payload) or "no channels")
        return result
