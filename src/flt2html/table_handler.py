"""Row and column bookkeeping for tables built cell by cell.

Tables arrive as a TABLE line declaring a column count followed by one
DESTINATION(CELL) line per cell.  Nothing marks the end of a row, so
:class:`TableHandler` wraps rows whenever the number of cells already in
the table is an exact multiple of the declared column count.
"""

from __future__ import annotations

import logging
from typing import Union
from xml.etree.ElementTree import Element

from flt2html.dom import append_element, iter_descendants, last_child
from flt2html.exceptions import RenderingError

logger = logging.getLogger(__name__)


class TableHandler:
    """Track declared column counts and lay out cells into rows.

    One handler belongs to one rendering pass; the column counts are
    keyed by table element and never written into the markup.
    """

    def __init__(self) -> None:
        self._columns: dict[Element, int] = {}

    def open_table(self, section: Element, columns: Union[str, int, None]) -> Element:
        """Append a ``<table>`` to *section* and record its column count.

        Args:
            section: Section receiving the table.
            columns: Declared column count from the TABLE line.

        Returns:
            The new table element.

        Raises:
            RenderingError: If *columns* is not a positive integer.
        """
        count = self._column_count(columns)
        table = append_element(section, "table")
        self._columns[table] = count
        logger.debug("Opened table with %d columns", count)
        return table

    def add_cell(self, section: Element, header: bool = False) -> Element:
        """Append a cell to the last table of *section*.

        A new ``<tr>`` is opened when the table has no row yet or when the
        existing cell count fills whole rows.

        Raises:
            RenderingError: If *section* holds no table.
        """
        table = last_child(section, "table")
        if table is None or table not in self._columns:
            raise RenderingError("Cannot set destination to cell when no table is defined")

        cell_count = sum(1 for _ in iter_descendants(table, "th", "td"))
        row = last_child(table, "tr")
        if row is None or cell_count % self._columns[table] == 0:
            row = append_element(table, "tr")
        return append_element(row, "th" if header else "td")

    @staticmethod
    def _column_count(value: Union[str, int, None]) -> int:
        if isinstance(value, bool):
            value = None
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if not isinstance(value, int) or value <= 0:
            raise RenderingError(f"Table column count must be a positive integer, got {value!r}")
        return value
