from __future__ import annotations

import posixpath

DEFAULT_CONTENT_TYPE = "application/octet-stream"
HTML_CONTENT_TYPE = "text/html"

CONTENT_TYPES = {
    "html": HTML_CONTENT_TYPE,
    "js": "application/javascript",
    "css": "text/css",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "svg": "image/svg+xml",
    "woff": "font/woff",
    "woff2": "font/woff2",
}


def classify(path: str) -> str:
    ext = posixpath.splitext(path)[1].lstrip(".").lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)
