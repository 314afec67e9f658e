"""HTML renderer - compiles an FLT line stream into an HTML tree.

The renderer walks the line stream exactly once.  Control lines change
the render state (current section, destination, pending link, tooltip
and blob) or insert structural elements; text lines are wrapped in
inline formatting elements and appended wherever the current
destination resolves to.

The destination element is looked up from the tree on every access
rather than cached, because the tree gains children between lines.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional
from xml.etree.ElementTree import Element, tostring

from flt2html.dom import (
    add_class,
    append_element,
    append_text,
    closest,
    contains,
    has_child_nodes,
    indent_blocks,
    insert_before,
    last_child,
    last_descendant,
    parent_map,
    remove_node,
)
from flt2html.exceptions import RenderingError
from flt2html.metadata import apply_metadata, document_title
from flt2html.options import RenderOptions
from flt2html.parser import (
    Align,
    ControlLine,
    Destination,
    Document,
    TextLine,
)
from flt2html.style_manager import (
    MONOSPACE_CLASS,
    STRIKEOUT_CLASS,
    UNDERLINE_CLASS,
    StyleManager,
)
from flt2html.table_handler import TableHandler

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Containers a new paragraph may be opened in, innermost first
_PARAGRAPH_CONTAINERS = ("aside", "td", "th", "section")

_HEAD_TAG = "h2"


# ---------------------------------------------------------------------------
# Render context
# ---------------------------------------------------------------------------

@dataclass
class Blob:
    """Binary payload staged by a BLOB line."""

    media_type: str
    data: str

    def to_data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


@dataclass
class RenderContext:
    """Mutable state of a single rendering pass."""

    root: Element
    body: Element
    section: Element
    tables: TableHandler = field(default_factory=TableHandler)
    note_index: int = 1
    link: Optional[Element] = None
    hint: Optional[str] = None
    blob: Optional[Blob] = None
    destination: Destination = Destination.BODY

    def reset(self) -> None:
        self.link = None
        self.hint = None


# ---------------------------------------------------------------------------
# HtmlRenderer
# ---------------------------------------------------------------------------

class HtmlRenderer:
    """Render a :class:`~flt2html.parser.Document` to HTML."""

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        style_manager: Optional[StyleManager] = None,
    ) -> None:
        self.options: RenderOptions = options or RenderOptions()
        self.style: StyleManager = style_manager or StyleManager(self.options.stylesheets)

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, doc: Document) -> str:
        """Return the serialized HTML for *doc*.

        Raises:
            RenderingError: If the line stream cannot be rendered.
        """
        return self.serialize(self.render_tree(doc))

    def render_tree(self, doc: Document) -> Element:
        """Build and return the ``<html>`` element tree for *doc*."""
        root = Element("html")
        head = append_element(root, "head")
        body = append_element(root, "body")
        self.style.apply_to_head(head)
        apply_metadata(doc, head)

        for cls in self.options.body_classes:
            add_class(body, cls)
        if self.options.title_heading and doc.features.dcmeta:
            title = document_title(doc)
            if title:
                append_element(body, "h1").text = title

        ctx = RenderContext(
            root=root,
            body=body,
            section=append_element(body, "section"),
        )
        logger.debug("Rendering %d lines", len(doc.lines))

        for line in doc.lines:
            # reset applies before the line itself, whatever its type
            if line.reset:
                ctx.reset()
            if isinstance(line, ControlLine):
                handler = getattr(self, f"_handle_{line.line_type.value}")
                handler(ctx, line)
            elif isinstance(line, TextLine):
                self._render_text(ctx, line)
            else:
                raise RenderingError(f"Unsupported line {line!r}")

        removed = self.cleanup(root)
        logger.debug(
            "Rendered %d notes, removed %d empty nodes", ctx.note_index - 1, removed
        )
        return root

    def serialize(self, root: Element) -> str:
        """Serialize a tree built by :meth:`render_tree`."""
        if self.options.body_only:
            body = root.find("body")
            if body is None:
                return ""
            return "\n".join(self._to_string(child) for child in body)
        return "<!DOCTYPE html>\n" + self._to_string(root)

    @staticmethod
    def cleanup(root: Element) -> int:
        """Remove every ``section`` and ``p`` without child nodes.

        Nodes are visited children-first, so a section emptied by the
        removal of its last paragraph is removed in the same pass.

        Returns:
            The number of removed elements.
        """
        parents = parent_map(root)
        removed = 0
        for elem in reversed(list(root.iter())):
            if elem.tag in ("section", "p") and not has_child_nodes(elem):
                parent = parents.get(elem)
                if parent is not None:
                    remove_node(parent, elem)
                    removed += 1
        return removed

    # ======================================================================
    # Destination resolution
    # ======================================================================

    def _destination_element(self, ctx: RenderContext) -> Element:
        """Return the element new content attaches to for ``ctx.destination``."""
        dest = ctx.destination

        if dest is Destination.BODY:
            p = last_child(ctx.section)
            if p is None or p.tag != "p":
                p = append_element(ctx.section, "p")
            return p

        if dest is Destination.NOTE:
            note = last_descendant(ctx.section, "aside")
            p = last_descendant(note, "p") if note is not None else None
            if p is None:
                raise RenderingError("No open note in the current section")
            return p

        if dest is Destination.CELL:
            cell = last_descendant(ctx.section, "th", "td")
            if cell is None:
                raise RenderingError("No open table cell in the current section")
            cont = last_descendant(cell, "aside", "p")
            return cont if cont is not None else cell

        if dest is Destination.HEAD:
            heading = last_child(ctx.section)
            if heading is None or heading.tag != _HEAD_TAG:
                heading = append_element(ctx.section, _HEAD_TAG)
            return heading

        raise RenderingError(f"Unknown render destination {dest!r}")

    # ======================================================================
    # Control line handlers
    # ======================================================================

    def _handle_section(self, ctx: RenderContext, line: ControlLine) -> None:
        ctx.link = None
        ctx.destination = Destination.BODY
        if not has_child_nodes(ctx.section):
            remove_node(ctx.body, ctx.section)

        ctx.section = append_element(ctx.body, "section")
        self._apply_align(ctx.section, line.align)
        if line.break_:
            first = next(child for child in ctx.body if child.tag == "section")
            if first is not ctx.section:
                insert_before(ctx.body, ctx.section, Element("hr"))
        logger.debug("Opened section %s", line.align.value)

    def _handle_paragraph(self, ctx: RenderContext, line: ControlLine) -> None:
        ctx.link = None
        if ctx.destination is Destination.HEAD:
            # headings are not paragraph containers; resolving one would
            # leave an empty heading behind
            cont = ctx.section
        else:
            cont = closest(ctx.root, self._destination_element(ctx), *_PARAGRAPH_CONTAINERS)
        if cont is None:
            raise RenderingError("No container for a new paragraph")
        p = append_element(cont, "p")
        self._apply_align(p, line.align)

    def _handle_hint(self, ctx: RenderContext, line: ControlLine) -> None:
        ctx.hint = _as_text(line.content)

    def _handle_link(self, ctx: RenderContext, line: ControlLine) -> None:
        link = append_element(self._destination_element(ctx), "a", href=_as_text(line.content))
        self._consume_hint(ctx, link)
        ctx.link = link

    def _handle_anchor(self, ctx: RenderContext, line: ControlLine) -> None:
        append_element(self._destination_element(ctx), "a", name=_as_text(line.content))

    def _handle_blob(self, ctx: RenderContext, line: ControlLine) -> None:
        ctx.blob = Blob(media_type=line.media_type, data=line.data)

    def _handle_image(self, ctx: RenderContext, line: ControlLine) -> None:
        if line.content:
            src = _as_text(line.content)
        elif ctx.blob is None:
            raise RenderingError("No image content available")
        else:
            src = ctx.blob.to_data_uri()
            ctx.blob = None
        img = append_element(self._destination_element(ctx), "img", src=src)
        self._consume_hint(ctx, img)

    def _handle_table(self, ctx: RenderContext, line: ControlLine) -> None:
        ctx.tables.open_table(ctx.section, line.content)

    def _handle_destination(self, ctx: RenderContext, line: ControlLine) -> None:
        ctx.link = None
        target = line.destination
        if not isinstance(target, Destination):
            raise RenderingError(f"Unknown render destination {target!r}")

        if target is Destination.NOTE:
            self._open_note(ctx)
        elif target is Destination.CELL:
            ctx.tables.add_cell(ctx.section, header=line.header)
        elif target is Destination.HEAD:
            ctx.section = append_element(ctx.body, "section")
        ctx.destination = target

    # ======================================================================
    # Footnotes
    # ======================================================================

    def _open_note(self, ctx: RenderContext) -> None:
        """Emit the reference marker and open a new footnote container.

        The marker and the note link to each other by sharing the
        footnote number in their ``name``/``href`` values.
        """
        index = ctx.note_index
        marker = append_element(
            self._destination_element(ctx),
            "a",
            name=f"note-return-{index}",
            href=f"#note-{index}",
        )
        add_class(marker, "to-note")
        marker.text = str(index)

        note = append_element(ctx.section, "aside")
        back = append_element(note, "a", name=f"note-{index}", href=f"#note-return-{index}")
        add_class(back, "from-note")
        ctx.note_index += 1
        append_element(note, "p")
        logger.debug("Opened note %d", index)

    # ======================================================================
    # Inline formatting
    # ======================================================================

    def _render_text(self, ctx: RenderContext, line: TextLine) -> None:
        out = self._destination_element(ctx)
        if ctx.link is not None and contains(out, ctx.link):
            out = ctx.link

        if line.italic:
            out = append_element(out, "em")
        if line.bold:
            out = append_element(out, "strong")
        if line.underline or line.strikeout or line.mono:
            out = append_element(out, "span")
            if line.underline:
                add_class(out, UNDERLINE_CLASS)
            if line.strikeout:
                add_class(out, STRIKEOUT_CLASS)
            if line.mono:
                add_class(out, MONOSPACE_CLASS)
        if line.supertext:
            out = append_element(out, "sup")
        if line.subtext:
            out = append_element(out, "sub")

        for idx, fragment in enumerate(_LINE_BREAK_RE.split(line.text)):
            if idx:
                append_element(out, "br")
            append_text(out, fragment)

    # ======================================================================
    # Helpers
    # ======================================================================

    def _apply_align(self, elem: Element, align: Align) -> None:
        cls = self.style.align_class(align)
        if cls:
            add_class(elem, cls)

    @staticmethod
    def _consume_hint(ctx: RenderContext, elem: Element) -> None:
        if ctx.hint:
            elem.set("title", ctx.hint)
        ctx.hint = None

    def _to_string(self, elem: Element) -> str:
        elem.tail = None
        if self.options.pretty:
            indent_blocks(elem)
        return tostring(elem, encoding="unicode", method="html")


def _as_text(value: object) -> str:
    return "" if value is None else str(value)
