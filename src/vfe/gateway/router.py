"""Per-request state machine of the verified gateway.

A request is either exempt, in which case ``handle`` returns ``None`` and the
caller lets it through untouched, or in scope, in which case it runs

    anchor -> resolve -> retrieve -> classify -> inject (HTML only) -> respond

and always ends in a response: the verified content, or a plain-text error.
The only suspension point is the retrieval await. The trust anchor is written
before it, so a cancelled request still leaves a consistent anchor behind.
"""
from __future__ import annotations

import logging

from fastapi import Response

from ..api.models import InterceptedRequest
from ..settings import settings
from .anchor import TrustAnchorStore
from .content_type import HTML_CONTENT_TYPE
from .errors import GatewayError, NoAnchor
from .inject import inject
from .paths import PathResolver
from .response import ResponseBuilder
from .retriever import VerifiedRetriever


def is_exempt_path(path: str, exempt_paths: list[str]) -> bool:
    # Suffix match keeps the check independent of the mount prefix.
    return any(path == p or path.endswith(p) for p in exempt_paths)


class InterceptionRouter:
    def __init__(
        self,
        anchors: TrustAnchorStore,
        retriever: VerifiedRetriever,
        paths: PathResolver | None = None,
        responses: ResponseBuilder | None = None,
        *,
        handled_schemes: list[str] | None = None,
        exempt_paths: list[str] | None = None,
        cid_param: str | None = None,
    ):
        self.anchors = anchors
        self.retriever = retriever
        self.paths = paths or PathResolver()
        self.responses = responses or ResponseBuilder()
        self.handled_schemes = handled_schemes if handled_schemes is not None else settings.handled_schemes
        self.exempt_paths = exempt_paths if exempt_paths is not None else settings.exempt_paths
        self.cid_param = cid_param or settings.cid_query_param

    def is_exempt(self, request: InterceptedRequest) -> bool:
        if request.method.upper() != "GET":
            return True
        if request.scheme.lower() not in self.handled_schemes:
            return True
        return is_exempt_path(request.path, self.exempt_paths)

    def establish_anchor(self, request: InterceptedRequest):
        """Store an explicit ``cid`` parameter, else fall back to the stored anchor."""
        cid = request.query.get(self.cid_param)
        if cid:
            self.anchors.set(cid)
            logging.info("Stored trusted CID: %s", cid)
            return self.anchors.get()
        anchor = self.anchors.get()
        if anchor is None:
            raise NoAnchor()
        logging.info("Using stored trusted CID: %s", anchor.cid)
        return anchor

    async def handle(self, request: InterceptedRequest) -> Response | None:
        if self.is_exempt(request):
            logging.debug("Passing through %s %s", request.method, request.path)
            return None
        try:
            anchor = self.establish_anchor(request)
            content_path = self.paths.resolve(request.path, anchor)
            payload = await self.retriever.fetch(content_path)
        except GatewayError as err:
            logging.warning("Verified gateway error %s for %s: %s", err.status_code, request.path, err.message)
            return self.responses.error(err)
        content_type = payload.mime_type
        if content_type == HTML_CONTENT_TYPE:
            html = payload.body.decode("utf-8", errors="replace")
            payload = payload.model_copy(update={"body": inject(html).encode("utf-8")})
        return self.responses.build(payload, content_type)
