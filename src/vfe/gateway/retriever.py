from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..api.models import ContentPath, FetchResult, VerifiedPayload
from .content_type import classify
from .errors import FetchFailed, UpstreamStatus, VerificationFailed

VerifiedFetch = Callable[[str], Awaitable[FetchResult]]


class VerifiedRetriever:
    """Turn a verified-fetch collaborator's answer into a payload or a typed error.

    The collaborator owns transport, block verification and timeouts; this
    wrapper only decides which of the three failure classes applies. A
    response the collaborator could not verify is never returned as a payload.
    """

    def __init__(self, fetch: VerifiedFetch):
        self._fetch = fetch

    async def fetch(self, content_path: ContentPath) -> VerifiedPayload:
        url = content_path.url
        try:
            result = await self._fetch(url)
        except Exception as e:
            logging.exception("Verified fetch error for %s", url)
            raise FetchFailed(f"Error: {e}") from e
        if not result.ok:
            raise UpstreamStatus(result.status, result.status_text)
        if not result.verified:
            raise VerificationFailed(f"Error: content at {url} could not be verified against its CID")
        return VerifiedPayload(body=result.body, mime_type=classify(content_path.path))
