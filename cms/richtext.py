from __future__ import annotations

import html
import json
from collections.abc import Mapping
from typing import Any

import bleach

# Rich documents are stored as node trees:
#   {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "..."}]}]}
# Block nodes hold other nodes; "text" leaves carry the characters and optional marks.

BLOCK_TYPES = frozenset(
    {
        "doc",
        "paragraph",
        "heading",
        "blockquote",
        "bulletList",
        "orderedList",
        "listItem",
        "codeBlock",
        "horizontalRule",
        "image",
    }
)

_ALLOWED_TAGS: list[str] = [
    "p",
    "br",
    "hr",
    "strong",
    "b",
    "em",
    "i",
    "u",
    "s",
    "a",
    "ul",
    "ol",
    "li",
    "h1",
    "h2",
    "h3",
    "h4",
    "blockquote",
    "code",
    "pre",
    "span",
]

_ALLOWED_ATTRS: dict[str, list[str]] = {
    "a": ["href", "title", "target", "rel"],
    "span": ["class"],
}

_ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]


def empty_document() -> dict:
    return {"type": "doc", "content": [{"type": "paragraph", "content": []}]}


def is_document(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("type") == "doc"


def coerce_document(value: Any) -> dict:
    """Accept a document, a JSON-encoded document or plain text; return a document."""
    if is_document(value):
        return dict(value)
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("{"):
            try:
                parsed = json.loads(s)
            except ValueError:
                parsed = None
            if is_document(parsed):
                return parsed
        return document_from_text(value) if s else empty_document()
    return empty_document()


def _is_block(node: Any) -> bool:
    return isinstance(node, Mapping) and node.get("type") in BLOCK_TYPES


def _node_text(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ""
    kind = node.get("type")
    if kind == "text":
        return str(node.get("text") or "")
    if kind == "hardBreak":
        return "\n"

    children = node.get("content")
    if not isinstance(children, list):
        return ""
    parts = [_node_text(c) for c in children]
    if any(_is_block(c) for c in children):
        return "\n".join(parts)
    return "".join(parts)


def extract_plain_text(document: Any) -> str:
    """Flatten a document to text, pre-order, one line per block sibling.

    Plain strings are returned unchanged.
    """
    if isinstance(document, str):
        return document
    return _node_text(document)


def document_from_text(text: str) -> dict:
    """One paragraph per non-empty line. Inline formatting is not reconstructed."""
    lines = [line for line in (text or "").split("\n") if line.strip()]
    if not lines:
        return empty_document()
    return {
        "type": "doc",
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": line}]} for line in lines],
    }


def _render_marks(text: str, marks: Any) -> str:
    out = html.escape(text)
    if not isinstance(marks, list):
        return out
    for mark in marks:
        if not isinstance(mark, Mapping):
            continue
        kind = mark.get("type")
        if kind == "bold":
            out = f"<strong>{out}</strong>"
        elif kind == "italic":
            out = f"<em>{out}</em>"
        elif kind == "underline":
            out = f"<u>{out}</u>"
        elif kind == "strike":
            out = f"<s>{out}</s>"
        elif kind == "code":
            out = f"<code>{out}</code>"
        elif kind == "link":
            href = html.escape(str((mark.get("attrs") or {}).get("href") or ""), quote=True)
            out = f'<a href="{href}" rel="noopener noreferrer">{out}</a>'
    return out


def _render_node(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ""
    kind = node.get("type")
    if kind == "text":
        return _render_marks(str(node.get("text") or ""), node.get("marks"))
    if kind == "hardBreak":
        return "<br>"
    if kind == "horizontalRule":
        return "<hr>"

    children = node.get("content") if isinstance(node.get("content"), list) else []
    inner = "".join(_render_node(c) for c in children)

    if kind == "doc":
        return inner
    if kind == "paragraph":
        return f"<p>{inner}</p>"
    if kind == "heading":
        level = (node.get("attrs") or {}).get("level") or 2
        try:
            level = max(1, min(4, int(level)))
        except (TypeError, ValueError):
            level = 2
        return f"<h{level}>{inner}</h{level}>"
    if kind == "blockquote":
        return f"<blockquote>{inner}</blockquote>"
    if kind == "bulletList":
        return f"<ul>{inner}</ul>"
    if kind == "orderedList":
        return f"<ol>{inner}</ol>"
    if kind == "listItem":
        return f"<li>{inner}</li>"
    if kind == "codeBlock":
        return f"<pre><code>{inner}</code></pre>"
    return inner


def sanitize_html(value: str | None) -> str:
    return bleach.clean(
        value or "",
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRS,
        protocols=_ALLOWED_PROTOCOLS,
        strip=True,
    )


def render_html(document: Any) -> str:
    """Render a document to sanitized HTML; plain strings become one paragraph."""
    if isinstance(document, str):
        document = document_from_text(document)
    return sanitize_html(_render_node(document))
