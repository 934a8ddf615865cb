"""Tests for the adaptive renderer."""

import io

from rich.console import Console, Group
from rich.text import Text

from contentdesk.content.models import (
    FlatMapSection,
    ListSection,
    PlainText,
    StructuredDocument,
    TextSection,
)
from contentdesk.content.renderer import (
    Block,
    BulletList,
    Document,
    KeyValueLine,
    KeyValueLines,
    Paragraph,
    Placeholder,
    Preformatted,
    render,
    render_text,
    to_rich,
)


def _script() -> StructuredDocument:
    return StructuredDocument(
        sections={
            "Visuals": ListSection(items=["Close-up", "Pan left", "Logo"]),
            "Audio": FlatMapSection(entries={"track": "lofi", "voice": "calm"}),
            "Caption": TextSection(text="Try it today"),
        }
    )


class TestRenderPlain:
    def test_empty_text_is_placeholder(self):
        assert render(PlainText(text="")) == Placeholder(message="No content available")

    def test_none_is_placeholder(self):
        assert isinstance(render(None), Placeholder)

    def test_custom_placeholder(self):
        assert render(PlainText(text=""), placeholder="Nothing yet") == Placeholder(
            message="Nothing yet"
        )

    def test_whitespace_only_text_is_not_placeholder(self):
        assert render(PlainText(text="  ")) == Preformatted(text="  ")

    def test_text_is_preformatted_verbatim(self):
        text = "Line one\n\n  indented\tline"
        assert render(PlainText(text=text)) == Preformatted(text=text)


class TestRenderStructured:
    def test_blocks_in_stored_order(self):
        node = render(_script())
        assert isinstance(node, Document)
        assert [block.title for block in node.blocks] == ["Visuals", "Audio", "Caption"]

    def test_section_kinds(self):
        node = render(_script())
        assert node.blocks[0] == Block(
            title="Visuals", body=BulletList(items=["Close-up", "Pan left", "Logo"])
        )
        assert node.blocks[1] == Block(
            title="Audio",
            body=KeyValueLines(
                lines=[
                    KeyValueLine(key="track", value="lofi"),
                    KeyValueLine(key="voice", value="calm"),
                ]
            ),
        )
        assert node.blocks[2] == Block(title="Caption", body=Paragraph(text="Try it today"))

    def test_raw_values_are_parsed_first(self):
        node = render('{"B": "second", "A": "first"}')
        assert [block.title for block in node.blocks] == ["B", "A"]

    def test_empty_document(self):
        assert render(StructuredDocument()) == Document(blocks=[])

    def test_render_is_repeatable(self):
        doc = _script()
        assert render(doc) == render(doc)


class TestRenderText:
    def test_placeholder(self):
        assert render_text(render(None)) == "No content available"

    def test_preformatted(self):
        assert render_text(render("a\n b")) == "a\n b"

    def test_document(self):
        expected = (
            "Visuals\n• Close-up\n• Pan left\n• Logo\n\n"
            "Audio\ntrack: lofi\nvoice: calm\n\n"
            "Caption\nTry it today"
        )
        assert render_text(render(_script())) == expected


class TestToRich:
    def _plain(self, renderable) -> str:
        console = Console(file=io.StringIO(), width=80, record=True, color_system=None)
        console.print(renderable)
        return console.export_text()

    def test_placeholder_and_text(self):
        assert isinstance(to_rich(render(None)), Text)
        assert to_rich(render("[bold]not markup[/bold]")).plain == "[bold]not markup[/bold]"

    def test_document_panels_keep_order(self):
        renderable = to_rich(render(_script()))
        assert isinstance(renderable, Group)
        output = self._plain(renderable)
        assert output.index("Visuals") < output.index("Audio") < output.index("Caption")
        assert output.index("Close-up") < output.index("Pan left") < output.index("Logo")
        assert "track: lofi" in output
