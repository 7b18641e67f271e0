from __future__ import annotations

from fastapi import Response

from ..api.models import VerifiedPayload
from ..settings import settings
from .errors import GatewayError


class ResponseBuilder:
    def __init__(self, cache_control: str | None = None):
        self.cache_control = cache_control or settings.cache_control

    def build(self, payload: VerifiedPayload, content_type: str, status: int = 200) -> Response:
        # Content is addressed by hash; a change in content means a new URL.
        return Response(
            content=payload.body,
            status_code=status,
            headers={"Content-Type": content_type, "Cache-Control": self.cache_control},
        )

    def error(self, err: GatewayError) -> Response:
        return Response(content=err.message, status_code=err.status_code, media_type="text/plain")
