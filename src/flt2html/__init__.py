"""Render FLT line streams to HTML."""

from __future__ import annotations

__version__ = "1.0.0"

from flt2html.converter import Converter
from flt2html.exceptions import Flt2HtmlError, ParsingError, RenderingError
from flt2html.options import RenderOptions
from flt2html.parser import Document, LineStreamParser
from flt2html.renderer import HtmlRenderer

__all__ = [
    "Converter",
    "Document",
    "Flt2HtmlError",
    "HtmlRenderer",
    "LineStreamParser",
    "ParsingError",
    "RenderOptions",
    "RenderingError",
    "__version__",
]
