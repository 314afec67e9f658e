"""Caller-supplied rendering options."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RenderOptions:
    """Options controlling the shape of the HTML output.

    Attributes:
        body_only: Return only the serialized children of ``<body>``
            instead of a complete document.
        title_heading: Insert an ``<h1>`` holding the document title at
            the top of the body when the document has a title.
        body_classes: Classes added to the ``<body>`` element.
        stylesheets: URLs of external stylesheets, emitted as
            ``<link rel="stylesheet">`` elements after the built-in style.
        pretty: Indent the serialized markup.
    """

    body_only: bool = False
    title_heading: bool = False
    body_classes: tuple[str, ...] = field(default_factory=tuple)
    stylesheets: tuple[str, ...] = field(default_factory=tuple)
    pretty: bool = True

    def __post_init__(self) -> None:
        # accept any iterable from callers, store tuples
        object.__setattr__(self, "body_classes", tuple(self.body_classes))
        object.__setattr__(self, "stylesheets", tuple(self.stylesheets))
