"""Map descriptive (Dublin Core) metadata onto ``<head>`` tags.

The document title becomes ``<title>``; the descriptive terms are
exposed as Open Graph ``<meta property="og:...">`` tags so that link
previews pick them up.
"""

from __future__ import annotations

from typing import NamedTuple
from xml.etree.ElementTree import Element

from flt2html.dom import append_element
from flt2html.parser import Document


class _OgTerm(NamedTuple):
    name: str
    merge: bool


# Dublin Core term -> Open Graph property
OG_TERMS: dict[str, _OgTerm] = {
    "title": _OgTerm("title", merge=True),
    "description": _OgTerm("description", merge=True),
    "creator": _OgTerm("article:author", merge=False),
    "subject": _OgTerm("article:tag", merge=False),
    "date": _OgTerm("article:published_time", merge=False),
}


def document_title(doc: Document) -> str:
    """Return the comma-joined title values, or an empty string."""
    return ", ".join(doc.get_term("title"))


def _og(head: Element, term: str, value: str) -> None:
    append_element(head, "meta", property=f"og:{term}", content=value)


def apply_metadata(doc: Document, head: Element) -> None:
    """Render the metadata of *doc* into *head*.

    Nothing is emitted when descriptive metadata is disabled for the
    document. Merged terms produce one tag with comma-joined values,
    the others one tag per value; absent terms produce nothing.
    """
    if not doc.features.dcmeta:
        return

    title = document_title(doc)
    if title:
        append_element(head, "title").text = title

    _og(head, "type", "article")
    for term, og in OG_TERMS.items():
        values = doc.get_term(term)
        if not values:
            continue
        if og.merge:
            values = [", ".join(values)]
        for value in values:
            _og(head, og.name, value)
