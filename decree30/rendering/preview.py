"""On-screen preview of a StructuredDocument.

``render_preview`` builds a tree of display nodes that mirrors the export
layout; ``render_preview_html`` turns that tree into an HTML fragment.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from decree30.correction.models import StructuredDocument
from decree30.rendering.layout import (
    DECORATIVE_RULE,
    RECIPIENTS_LABEL,
    DocumentLayout,
    resolve_layout,
)

_TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class PreviewNode:
    """A display element: tag, optional text, CSS classes and children."""

    tag: str
    text: str = ""
    classes: tuple[str, ...] = ()
    children: tuple[PreviewNode, ...] = ()

    def walk(self) -> Iterator[PreviewNode]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, css_class: str) -> PreviewNode | None:
        """First node carrying ``css_class``."""
        return next((n for n in self.walk() if css_class in n.classes), None)

    def texts(self) -> list[str]:
        """Non-empty texts in document order."""
        return [n.text for n in self.walk() if n.text]


# Every text node keeps line breaks, as the export does with each "\n".
TEXT_CLASS = "pre-wrap"


def _text(tag: str, text: str, *classes: str) -> PreviewNode:
    return PreviewNode(tag, text=text, classes=(*classes, TEXT_CLASS))


def _p(text: str, *classes: str) -> PreviewNode:
    return _text("p", text, *classes)


def _div(*children: PreviewNode, classes: tuple[str, ...] = ()) -> PreviewNode:
    return PreviewNode("div", classes=classes, children=children)


def render_preview(document: StructuredDocument) -> PreviewNode:
    layout = resolve_layout(document)
    return _div(
        _header(layout),
        _text("h2", layout.title, "title", "center", "bold"),
        _div(
            *(_p(text, "paragraph", "justify", "indent") for text in layout.paragraphs),
            classes=("body",),
        ),
        _footer(layout),
        classes=("document",),
    )


def _header(layout: DocumentLayout) -> PreviewNode:
    left = _div(
        _p(layout.agency_name, "agency-name", "center", "bold"),
        _p(layout.agency_number, "agency-number", "center"),
        classes=("column", "header-left"),
    )
    right = _div(
        _p(layout.national_name, "national-name", "center", "bold"),
        _p(layout.motto, "motto", "center", "bold"),
        _p(DECORATIVE_RULE, "rule", "center"),
        _p(layout.date, "date", "center", "italic"),
        classes=("column", "header-right"),
    )
    return _div(left, right, classes=("row", "header"))


def _footer(layout: DocumentLayout) -> PreviewNode:
    left_children: tuple[PreviewNode, ...] = ()
    if layout.recipients is not None:
        left_children = (
            _p(RECIPIENTS_LABEL, "recipients-label", "bold", "italic"),
            PreviewNode(
                "ul",
                classes=("recipients",),
                children=tuple(_text("li", line) for line in layout.recipient_lines),
            ),
        )
    left = _div(*left_children, classes=("column", "footer-left"))
    right = _div(
        _p(layout.signer_title, "signer-title", "center", "bold"),
        _div(classes=("signature-gap",)),
        _p(layout.signer_name, "signer-name", "center", "bold"),
        classes=("column", "footer-right"),
    )
    return _div(left, right, classes=("row", "footer"))


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_preview_html(document: StructuredDocument) -> str:
    """HTML fragment (with inline styles) for the preview tree."""
    template = _environment().get_template("preview.html.j2")
    return template.render(root=render_preview(document))


__all__ = ["PreviewNode", "render_preview", "render_preview_html"]
