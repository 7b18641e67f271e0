from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

import httpx


class NameResolver(Protocol):
    def resolve(self, name: str) -> str | None: ...


class ConfigNameResolver:
    """Static name -> CID lookup in a JSON object.

    ``source`` is a local file path or an http(s) URL. Unreadable sources,
    malformed JSON and missing names all resolve to ``None``.
    """

    def __init__(self, source: Path | str, timeout: float = 10.0):
        self.source = source
        self.timeout = timeout

    def load(self) -> dict[str, str]:
        src = str(self.source)
        if src.startswith(("http://", "https://")):
            r = httpx.get(src, timeout=self.timeout)
            r.raise_for_status()
            doc = r.json()
        else:
            doc = json.loads(Path(src).read_text())
        if not isinstance(doc, dict):
            raise ValueError(f"name config {src} is not a JSON object")
        return {str(k): v for k, v in doc.items() if isinstance(v, str)}

    def resolve(self, name: str) -> str | None:
        try:
            return self.load().get(name) or None
        except Exception as e:  # noqa: S112
            logging.error("Config resolution error for %s: %s", name, e)
            return None


class ChainedNameResolver:
    def __init__(self, *resolvers: NameResolver):
        self.resolvers = resolvers

    def resolve(self, name: str) -> str | None:
        for r in self.resolvers:
            cid = r.resolve(name)
            if cid:
                return cid
        return None
