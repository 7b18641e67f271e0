from __future__ import annotations

from urllib.parse import urlsplit

import httpx

from ..api.models import FetchResult
from ..settings import settings

MAX_REDIRECTS = 5


def node_url_for(content_path: str, node_url: str) -> str:
    """Map ``ipfs://<cid>/<path>`` onto the node's path gateway, ``<node>/ipfs/<cid>/<path>``."""
    parts = urlsplit(content_path)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"not a content path: {content_path!r}")
    return f"{node_url.rstrip('/')}/{parts.scheme}/{parts.netloc}{parts.path or '/'}"


def within_root(url: httpx.URL, node: httpx.URL, root: str) -> bool:
    """True when ``url`` is on the node's origin and under ``root`` (``/ipfs/<cid>``)."""
    if (url.scheme, url.host, url.port) != (node.scheme, node.host, node.port):
        return False
    path = url.path
    if ".." in path.split("/"):
        return False
    return path == root or path.startswith(root + "/")


class NodeFetcher:
    """Verified-fetch collaborator backed by a local IPFS node's HTTP gateway.

    A local node checks every block it assembles against the block's multihash
    before serving it, so a successful answer from it is verified content.
    When the node is not trusted to do that (``node_verifies_blocks=False``)
    every result is reported unverified and the gateway refuses to serve it.

    Redirects are followed only while they stay under ``/ipfs/<cid>`` on the
    node itself; a redirect anywhere else is reported unverified without
    being requested. Transport errors and timeouts are raised, not wrapped.
    """

    def __init__(
        self,
        node_url: str | None = None,
        *,
        verifies_blocks: bool | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.node_url = node_url or settings.node_url
        self.verifies_blocks = settings.node_verifies_blocks if verifies_blocks is None else verifies_blocks
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self._transport = transport

    async def __call__(self, content_path: str) -> FetchResult:
        parts = urlsplit(content_path)
        url = httpx.URL(node_url_for(content_path, self.node_url))
        node = httpx.URL(self.node_url)
        root = f"/{parts.scheme}/{parts.netloc}"
        if not within_root(url, node, root):
            raise ValueError(f"content path escapes its root: {content_path!r}")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.get(url)
            hops = 0
            while r.is_redirect and r.next_request is not None:
                target = r.next_request.url
                if hops >= MAX_REDIRECTS or not within_root(target, node, root):
                    return FetchResult(
                        ok=True,
                        status=r.status_code,
                        status_text=f"redirect to {target} leaves {root}",
                        verified=False,
                    )
                r = await client.send(r.next_request)
                hops += 1
        return FetchResult(
            ok=r.is_success,
            status=r.status_code,
            status_text=r.reason_phrase,
            body=r.content,
            verified=r.is_success and self.verifies_blocks,
        )
