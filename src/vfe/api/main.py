from __future__ import annotations

import json
import logging
from urllib.parse import quote

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from ..client.node import NodeFetcher
from ..gateway.anchor import TrustAnchorStore
from ..gateway.retriever import VerifiedRetriever
from ..gateway.router import InterceptionRouter
from ..resolve.ens import EnsNameResolver
from ..resolve.names import ChainedNameResolver, ConfigNameResolver
from ..settings import settings
from .models import InterceptedRequest

app = FastAPI(title="VFE Verified Gateway")

BOOTLOADER_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>VFE Bootloader</title></head>
<body>
<p>Open <code>/bootloader.html?name=&lt;name&gt;</code> to resolve a name,
or <code>/?cid=&lt;cid&gt;</code> to load a trusted CID directly.</p>
</body>
</html>
"""


def build_name_resolver() -> ChainedNameResolver:
    resolvers = []
    if settings.eth_rpc_url:
        resolvers.append(EnsNameResolver(
            settings.eth_rpc_url,
            settings.ens_registry_address,
            timeout=settings.resolver_timeout_seconds,
        ))
    resolvers.append(ConfigNameResolver(settings.name_config_path, timeout=settings.resolver_timeout_seconds))
    return ChainedNameResolver(*resolvers)


def build_router() -> InterceptionRouter:
    return InterceptionRouter(_anchors, VerifiedRetriever(NodeFetcher()))


# Session-scoped trust anchor shared by every in-flight request of this process.
_anchors = TrustAnchorStore()
_router = build_router()
_names = build_name_resolver()


@app.middleware("http")
async def verified_gateway(request: Request, call_next):
    query: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        query.setdefault(key, value)  # first value wins for repeated keys
    intercepted = InterceptedRequest(
        method=request.method,
        scheme=request.url.scheme,
        path=request.url.path,
        query=query,
    )
    response = await _router.handle(intercepted)
    if response is None:
        return await call_next(request)
    return response


@app.get("/config.json")
def get_name_config():
    path = settings.name_config_path
    if not path.exists():
        raise HTTPException(404, "no name configuration")
    try:
        doc = json.loads(path.read_text())
    except ValueError as e:
        logging.exception("Failed to parse name configuration %s", path)
        raise HTTPException(500, "invalid name configuration") from e
    return doc


@app.get("/bootloader.html")
def bootloader(request: Request, name: str | None = None):
    if not name:
        return HTMLResponse(BOOTLOADER_PAGE)
    cid = _names.resolve(name)
    if cid is None:
        logging.warning("Could not resolve %s to a CID", name)
        return Response(f"Could not resolve {name} to a CID", status_code=404, media_type="text/plain")
    root = request.scope.get("root_path", "")
    return RedirectResponse(f"{root}/?{settings.cid_query_param}={quote(cid)}", status_code=302)
