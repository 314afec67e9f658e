"""High-level FLT-to-HTML conversion orchestrator.

Ties together the line-stream parser and the renderer into a single
public API for converting FLT line streams (JSON) or files to HTML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from flt2html.options import RenderOptions
from flt2html.parser import Document, LineStreamParser
from flt2html.renderer import HtmlRenderer

logger = logging.getLogger(__name__)


class Converter:
    """Convert FLT line streams to HTML.

    Usage::

        converter = Converter(RenderOptions(title_heading=True))
        converter.convert_file("input.json", "output.html")

        # or from string
        html = converter.convert_text('[{"type": "section"}, {"text": "Hi"}]')
    """

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()
        self.parser = LineStreamParser()
        self.renderer = HtmlRenderer(self.options)

    def convert_text(self, json_text: str) -> str:
        """Convert the JSON form of a line stream to HTML.

        Args:
            json_text: JSON source string.

        Returns:
            The rendered HTML.
        """
        doc = self.parser.parse(json_text)
        return self.convert_document(doc)

    def convert_document(self, doc: Document) -> str:
        return self.renderer.render(doc)

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> None:
        """Read a line-stream file and write the HTML output.

        Args:
            input_path: Path to the input ``.json`` file.
            output_path: Path for the output ``.html`` file.
            encoding: Text encoding of the source file.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        source = input_path.read_text(encoding=encoding)
        html_text = self.convert_text(source)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html_text, encoding="utf-8")
        logger.debug("Wrote %s (%d characters)", output_path, len(html_text))
