"""Adaptive renderer — ContentValues to a display tree.

``render`` is pure: it only reshapes a ContentValue into nodes that a
front end can draw.  Section, list-item and flat-map order is preserved
exactly, since generated scripts and ranked bullet points encode their
meaning in that order.  ``render_text`` and ``to_rich`` project the tree
for plain output and the terminal respectively.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from contentdesk.content.models import (
    FlatMapSection,
    ListSection,
    PlainText,
)
from contentdesk.content.parser import parse

EMPTY_PLACEHOLDER = "No content available"
BULLET = "•"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Placeholder(_Node):
    """Shown for content that is present but empty."""

    kind: Literal["placeholder"] = "placeholder"
    message: str = EMPTY_PLACEHOLDER


class Preformatted(_Node):
    kind: Literal["preformatted"] = "preformatted"
    text: str


class Paragraph(_Node):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class BulletList(_Node):
    kind: Literal["bullets"] = "bullets"
    items: list[str] = Field(default_factory=list)


class KeyValueLine(_Node):
    key: str
    value: str


class KeyValueLines(_Node):
    kind: Literal["key_values"] = "key_values"
    lines: list[KeyValueLine] = Field(default_factory=list)


BlockBody = Annotated[Paragraph | BulletList | KeyValueLines, Field(discriminator="kind")]


class Block(_Node):
    """A labelled section of a structured document."""

    title: str
    body: BlockBody


class Document(_Node):
    kind: Literal["document"] = "document"
    blocks: list[Block] = Field(default_factory=list)


RenderNode = Placeholder | Preformatted | Document


def render(
    value: Any,
    *,
    placeholder: str = EMPTY_PLACEHOLDER,
) -> RenderNode:
    """Render a content value into a display tree.

    Raw channel values are accepted too and run through ``parse`` first.
    """
    content = parse(value)
    if isinstance(content, PlainText):
        if content.text == "":
            return Placeholder(message=placeholder)
        return Preformatted(text=content.text)

    blocks: list[Block] = []
    for title, body in content.sections.items():
        if isinstance(body, ListSection):
            node: Paragraph | BulletList | KeyValueLines = BulletList(items=list(body.items))
        elif isinstance(body, FlatMapSection):
            node = KeyValueLines(
                lines=[KeyValueLine(key=k, value=v) for k, v in body.entries.items()]
            )
        else:
            node = Paragraph(text=body.text)
        blocks.append(Block(title=title, body=node))
    return Document(blocks=blocks)


def _body_lines(body: Paragraph | BulletList | KeyValueLines) -> list[str]:
    if isinstance(body, BulletList):
        return [f"{BULLET} {item}" for item in body.items]
    if isinstance(body, KeyValueLines):
        return [f"{line.key}: {line.value}" for line in body.lines]
    return [body.text]


def render_text(node: RenderNode) -> str:
    """Project a display tree to plain text."""
    if isinstance(node, Placeholder):
        return node.message
    if isinstance(node, Preformatted):
        return node.text

    chunks: list[str] = []
    for block in node.blocks:
        chunks.append("\n".join([block.title, *_body_lines(block.body)]))
    return "\n\n".join(chunks)


def to_rich(node: RenderNode) -> RenderableType:
    """Project a display tree to rich renderables for the console."""
    if isinstance(node, Placeholder):
        return Text(node.message, style="italic dim")
    if isinstance(node, Preformatted):
        return Text(node.text)

    panels: list[RenderableType] = []
    for block in node.blocks:
        body = block.body
        if isinstance(body, KeyValueLines):
            text = Text()
            for i, line in enumerate(body.lines):
                if i:
                    text.append("\n")
                text.append(f"{line.key}:", style="bold")
                text.append(f" {line.value}")
        elif isinstance(body, BulletList):
            text = Text("\n".join(_body_lines(body)))
        else:
            text = Text(body.text)
        panels.append(
            Panel(text, title=Text(block.title, style="bold magenta"), title_align="left")
        )
    return Group(*panels)
