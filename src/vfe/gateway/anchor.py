from __future__ import annotations

import threading
import time

from ..api.models import TrustAnchor


class TrustAnchorStore:
    """Single slot holding the CID the current session trusts.

    ``set`` replaces the anchor wholesale and ``get`` returns whatever the last
    completed ``set`` stored. Nothing here inspects the CID; format problems
    surface later as fetch failures.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._anchor: TrustAnchor | None = None

    def set(self, cid: str) -> None:
        anchor = TrustAnchor(cid=cid, established_at_ms=int(time.time()*1000))
        with self._lock:
            self._anchor = anchor

    def get(self) -> TrustAnchor | None:
        with self._lock:
            return self._anchor
