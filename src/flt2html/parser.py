"""FLT line model and a JSON reader that produces it.

A rendered document is an ordered stream of *control lines* (structural
directives) and *text lines* (runs of formatted text), plus descriptive
metadata terms.  :class:`LineStreamParser` reads the JSON interchange
form of that stream into a :class:`Document`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from flt2html.exceptions import ParsingError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line definitions
# ---------------------------------------------------------------------------

class LineType(Enum):
    SECTION = "section"
    PARAGRAPH = "paragraph"
    HINT = "hint"
    LINK = "link"
    ANCHOR = "anchor"
    BLOB = "blob"
    IMAGE = "image"
    TABLE = "table"
    DESTINATION = "destination"


class Destination(Enum):
    BODY = "body"
    NOTE = "note"
    CELL = "cell"
    HEAD = "head"


class Align(Enum):
    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class ControlLine:
    """A structural directive."""

    line_type: LineType
    content: Union[str, int, None] = None
    align: Align = Align.NONE
    break_: bool = False
    # DESTINATION
    destination: Optional[Destination] = None
    header: bool = False
    # BLOB
    media_type: str = ""
    data: str = ""
    reset: bool = False


@dataclass(frozen=True)
class TextLine:
    """A run of text sharing one set of style flags."""

    text: str = ""
    italic: bool = False
    bold: bool = False
    underline: bool = False
    strikeout: bool = False
    mono: bool = False
    supertext: bool = False
    subtext: bool = False
    reset: bool = False


Line = Union[ControlLine, TextLine]


@dataclass
class Features:
    dcmeta: bool = True


@dataclass
class Document:
    """A fully materialised line stream with its metadata."""

    lines: list[Line] = field(default_factory=list)
    metadata: dict[str, list[str]] = field(default_factory=dict)
    features: Features = field(default_factory=Features)

    def get_term(self, name: str) -> list[str]:
        """Return the values of metadata term *name* (empty if absent)."""
        return list(self.metadata.get(name, []))


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

_TEXT_FLAGS = ("italic", "bold", "underline", "strikeout", "mono", "supertext", "subtext")


class LineStreamParser:
    """Parse the JSON form of an FLT line stream into a :class:`Document`."""

    # -- public API ---------------------------------------------------------

    def parse(self, text: str) -> Document:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParsingError(f"Invalid JSON: {exc}") from exc
        return self.parse_data(data)

    def parse_data(self, data: Any) -> Document:
        """Build a :class:`Document` from already-decoded JSON data.

        Args:
            data: Either a list of line objects or an object with
                ``lines``, ``metadata`` and ``features`` keys.

        Returns:
            The parsed document.

        Raises:
            ParsingError: If the data does not describe a line stream.
        """
        if isinstance(data, list):
            data = {"lines": data}
        if not isinstance(data, dict):
            raise ParsingError("Expected a JSON object or array at top level")

        raw_lines = data.get("lines", [])
        if not isinstance(raw_lines, list):
            raise ParsingError("'lines' must be an array")

        lines = [self._convert_line(idx, raw) for idx, raw in enumerate(raw_lines)]
        doc = Document(
            lines=lines,
            metadata=self._convert_metadata(data.get("metadata", {})),
            features=self._convert_features(data.get("features", {})),
        )
        logger.debug("Parsed %d lines, %d metadata terms", len(lines), len(doc.metadata))
        return doc

    # -- line conversion ----------------------------------------------------

    def _convert_line(self, idx: int, raw: Any) -> Line:
        if not isinstance(raw, dict):
            raise ParsingError("line entries must be objects", idx)
        if "type" not in raw:
            return self._convert_text_line(idx, raw)

        line_type = self._enum(LineType, raw["type"], "line type", idx)
        content = raw.get("content")
        if content is not None and not isinstance(content, (str, int)):
            raise ParsingError("'content' must be a string or integer", idx)

        destination = None
        if line_type is LineType.DESTINATION:
            if "destination" not in raw:
                raise ParsingError("destination line without 'destination'", idx)
            destination = self._enum(Destination, raw["destination"], "destination", idx)

        return ControlLine(
            line_type=line_type,
            content=content,
            align=self._enum(Align, raw.get("align") or "none", "alignment", idx),
            break_=bool(raw.get("break", False)),
            destination=destination,
            header=bool(raw.get("header", False)),
            media_type=str(raw.get("mediaType", "")),
            data=str(raw.get("data", "")),
            reset=bool(raw.get("reset", False)),
        )

    def _convert_text_line(self, idx: int, raw: dict) -> TextLine:
        text = raw.get("text", "")
        if not isinstance(text, str):
            raise ParsingError("'text' must be a string", idx)
        flags = {name: bool(raw.get(name, False)) for name in _TEXT_FLAGS}
        return TextLine(text=text, reset=bool(raw.get("reset", False)), **flags)

    # -- metadata -----------------------------------------------------------

    def _convert_metadata(self, raw: Any) -> dict[str, list[str]]:
        if not isinstance(raw, dict):
            raise ParsingError("'metadata' must be an object")
        terms: dict[str, list[str]] = {}
        for name, value in raw.items():
            if isinstance(value, str):
                terms[name] = [value]
            elif isinstance(value, list) and all(isinstance(v, str) for v in value):
                terms[name] = list(value)
            else:
                raise ParsingError(f"metadata term {name!r} must be a string or list of strings")
        return terms

    def _convert_features(self, raw: Any) -> Features:
        if not isinstance(raw, dict):
            raise ParsingError("'features' must be an object")
        return Features(dcmeta=bool(raw.get("dcmeta", True)))

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def _enum(enum_cls: type[Enum], value: Any, what: str, idx: int) -> Any:
        try:
            return enum_cls(str(value).lower())
        except ValueError:
            raise ParsingError(f"unknown {what} {value!r}", idx) from None
