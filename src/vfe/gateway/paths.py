from __future__ import annotations

from ..api.models import ContentPath, TrustAnchor
from ..settings import settings
from .errors import InvalidContentPath, NoAnchor

# Characters that would let a CID end its URL authority early.
CID_FORBIDDEN = frozenset("/?#%\\@: \t\r\n")


class PathResolver:
    def __init__(self, scheme: str | None = None, index_path: str | None = None):
        self.scheme = scheme or settings.content_scheme
        self.index_path = index_path or settings.index_path

    def resolve(self, request_path: str, anchor: TrustAnchor | None) -> ContentPath:
        if anchor is None:
            raise NoAnchor()
        if not anchor.cid or CID_FORBIDDEN.intersection(anchor.cid):
            raise InvalidContentPath(f"Invalid trusted CID: {anchor.cid!r}")
        path = self.index_path if request_path == "/" else request_path
        if not path.startswith("/") or "\\" in path:
            raise InvalidContentPath(f"Invalid request path: {request_path!r}")
        # Dot segments would climb out of the CID root once joined into a URL.
        if any(seg in (".", "..") for seg in path.split("/")):
            raise InvalidContentPath(f"Invalid request path: {request_path!r}")
        return ContentPath(scheme=self.scheme, cid=anchor.cid, path=path)
