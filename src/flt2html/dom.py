"""DOM-style helpers over :mod:`xml.etree.ElementTree`.

ElementTree keeps text in ``.text``/``.tail`` and has no parent links.
These helpers give the renderer the handful of DOM operations it needs
(text nodes, class lists, ``closest``, ``contains``, node removal) on
top of plain :class:`~xml.etree.ElementTree.Element` objects.
"""

from __future__ import annotations

from typing import Iterator, Optional
from xml.etree.ElementTree import Element, SubElement


def append_element(parent: Element, tag: str, **attrs: str) -> Element:
    """Append a new *tag* element to *parent* and return it."""
    return SubElement(parent, tag, attrs)


def append_text(parent: Element, text: str) -> None:
    """Append a text node after the last child of *parent*."""
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


def add_class(elem: Element, name: str) -> None:
    classes = elem.get("class", "").split()
    if name not in classes:
        classes.append(name)
    elem.set("class", " ".join(classes))


def has_child_nodes(elem: Element) -> bool:
    """Return True if *elem* has child elements or any text node.

    An empty string still counts as a text node once one was appended.
    """
    return len(elem) > 0 or elem.text is not None


def iter_descendants(elem: Element, *tags: str) -> Iterator[Element]:
    """Yield descendants of *elem* (not *elem* itself) in document order."""
    for node in elem.iter():
        if node is not elem and (not tags or node.tag in tags):
            yield node


def last_descendant(elem: Element, *tags: str) -> Optional[Element]:
    found = None
    for found in iter_descendants(elem, *tags):
        pass
    return found


def last_child(elem: Element, *tags: str) -> Optional[Element]:
    for child in reversed(elem):
        if not tags or child.tag in tags:
            return child
    return None


def contains(ancestor: Element, elem: Element) -> bool:
    """DOM ``Node.contains``: True when *elem* is *ancestor* or inside it."""
    return any(node is elem for node in ancestor.iter())


def parent_map(root: Element) -> dict[Element, Element]:
    return {child: parent for parent in root.iter() for child in parent}


def closest(root: Element, elem: Element, *tags: str) -> Optional[Element]:
    """Return the nearest of *elem* and its ancestors whose tag is in *tags*.

    Args:
        root: Element the ancestor chain is resolved against.
        elem: Starting element (included in the search).
        tags: Accepted tag names.
    """
    parents = parent_map(root)
    node: Optional[Element] = elem
    while node is not None:
        if node.tag in tags:
            return node
        node = parents.get(node)
    return None


def insert_before(parent: Element, ref: Element, elem: Element) -> None:
    for index, child in enumerate(parent):
        if child is ref:
            parent.insert(index, elem)
            return
    raise ValueError("reference element is not a child of parent")


def remove_node(parent: Element, elem: Element) -> None:
    """Detach *elem* from *parent*, keeping the text that followed it."""
    index = next(i for i, child in enumerate(parent) if child is elem)
    if elem.tail:
        if index > 0:
            prev = parent[index - 1]
            prev.tail = (prev.tail or "") + elem.tail
        else:
            parent.text = (parent.text or "") + elem.tail
    elem.tail = None
    parent.remove(elem)


# Elements whose children are laid out as blocks; whitespace between
# their children is insignificant.
BLOCK_CONTAINERS = frozenset({"html", "head", "body", "section", "table", "tr", "aside"})


def indent_blocks(elem: Element, space: str = "  ", level: int = 0) -> None:
    """Indent the block structure under *elem* in place.

    Unlike :func:`xml.etree.ElementTree.indent`, the text of paragraphs,
    headings, cells and inline elements is left untouched, so adjacent
    inline runs stay adjacent.
    """
    if elem.tag not in BLOCK_CONTAINERS or not len(elem):
        return
    child_indent = "\n" + space * (level + 1)
    if not elem.text or not elem.text.strip():
        elem.text = child_indent
    for child in elem:
        indent_blocks(child, space, level + 1)
        if not child.tail or not child.tail.strip():
            child.tail = child_indent
    last = elem[-1]
    if not last.tail.strip():
        last.tail = "\n" + space * level
