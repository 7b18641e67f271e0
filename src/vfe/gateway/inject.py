"""Textual marker injection for verified HTML.

Works on the decoded document text, never on a parsed tree, so markup the
gateway does not touch is returned byte for byte. Each insertion rule below is
total: it returns the (possibly unchanged) text and never raises, and the
rules run independently of each other.
"""
from __future__ import annotations

import re

from ..api.models import MarkerSpec

HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
HTML_OPEN_RE = re.compile(r"<html(?=[\s/>])[^>]*>", re.IGNORECASE)
BODY_CLOSE_RE = re.compile(r"</body\s*>", re.IGNORECASE)
BODY_OPEN_RE = re.compile(r"<body(?=[\s/>])[^>]*>", re.IGNORECASE)

DEFAULT_MARKER = MarkerSpec()


def _insert_head(html: str, marker: MarkerSpec) -> str:
    block = f"{marker.meta_tag}\n{marker.style_block}"
    m = HEAD_CLOSE_RE.search(html)
    if m is None:
        return block + html
    return html[:m.start()] + block + html[m.start():]


def _mark_html_tag(html: str, marker: MarkerSpec) -> str:
    m = HTML_OPEN_RE.search(html)
    if m is None:
        return html
    # Attribute goes right before ">" so existing attributes keep their order.
    close = m.end() - 1
    return html[:close] + marker.data_attribute + html[close:]


def _insert_badge(html: str, marker: MarkerSpec) -> str:
    m = BODY_CLOSE_RE.search(html)
    if m is not None:
        return html[:m.start()] + marker.badge + "\n" + html[m.start():]
    m = BODY_OPEN_RE.search(html)
    if m is not None:
        return html[:m.end()] + marker.badge + html[m.end():]
    return html + marker.badge


INSERTION_RULES = (_insert_head, _mark_html_tag, _insert_badge)


def inject(html: str, marker: MarkerSpec = DEFAULT_MARKER) -> str:
    """Return ``html`` carrying the verification meta tag, attribute and badge.

    Meant to run exactly once per response; a second pass would add a second
    set of markers.
    """
    out = html
    for rule in INSERTION_RULES:
        out = rule(out, marker)
    return out
