"""Fixed stylesheet and alignment classes for rendered documents.

The class names below are part of the output contract: text lines and
sections reference them directly, so they never vary between documents.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Optional
from xml.etree.ElementTree import Element

from flt2html.dom import append_element
from flt2html.parser import Align

STYLESHEET = """
    .underline { text-decoration: underline; }
    .strikeout { text-decoration: line-through; }
    .monospace { font-family: monospace; }
    .align-left { text-align: left; }
    .align-center { text-align: center; }
    .align-right { text-align: right; }
    a.to-note { vertical-align: super; font-size: 0.5em; }
"""

ALIGN_CLASSES = MappingProxyType({
    Align.LEFT: "align-left",
    Align.CENTER: "align-center",
    Align.RIGHT: "align-right",
})

UNDERLINE_CLASS = "underline"
STRIKEOUT_CLASS = "strikeout"
MONOSPACE_CLASS = "monospace"


class StyleManager:
    """Populate ``<head>`` with the charset, built-in style and links."""

    def __init__(self, stylesheets: Iterable[str] = ()) -> None:
        self.stylesheets: tuple[str, ...] = tuple(stylesheets)

    @staticmethod
    def align_class(align: Align) -> Optional[str]:
        """Return the class for *align*, or None when it has no class."""
        return ALIGN_CLASSES.get(align)

    def apply_to_head(self, head: Element) -> None:
        append_element(
            head,
            "meta",
            **{"http-equiv": "Content-Type", "content": "text/html; charset=utf-8"},
        )
        style = append_element(head, "style")
        style.text = STYLESHEET
        for url in self.stylesheets:
            append_element(head, "link", rel="stylesheet", href=url)
