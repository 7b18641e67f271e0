from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api.models import TrustAnchor
from .gateway.errors import NoAnchor
from .gateway.inject import inject
from .gateway.paths import PathResolver
from .settings import settings


def cmd_serve(args: argparse.Namespace) -> int:  # pragma: no cover - runs a server
    import uvicorn

    from .api.main import app
    uvicorn.run(app, host=args.host, port=args.port, reload=False)
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    from .api.main import build_name_resolver

    cid = build_name_resolver().resolve(args.name)
    if cid is None:
        print(f"Could not resolve {args.name}", file=sys.stderr)
        return 1
    print(cid)
    return 0


def cmd_inject(args: argparse.Namespace) -> int:
    src = Path(args.input)
    if not src.exists():
        print(f"Input not found: {src}", file=sys.stderr)
        return 2
    out = inject(src.read_text(encoding="utf-8", errors="replace"))
    if args.output:
        Path(args.output).write_text(out, encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(out)
    return 0


def cmd_path(args: argparse.Namespace) -> int:
    anchor = TrustAnchor(cid=args.cid, established_at_ms=0) if args.cid else None
    try:
        content_path = PathResolver().resolve(args.request_path, anchor)
    except NoAnchor as e:
        print(e.message, file=sys.stderr)
        return 2
    print(content_path.url)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vfe-cli",
        description="Verified IPFS gateway utilities",
    )
    p.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_serve = sub.add_parser("serve", help="Run the verified gateway")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=cmd_serve)

    p_resolve = sub.add_parser("resolve", help="Resolve a name to a CID (ENS, then static config)")
    p_resolve.add_argument("name")
    p_resolve.set_defaults(func=cmd_resolve)

    p_inject = sub.add_parser("inject", help="Apply the VERIFIED marker to a local HTML file")
    p_inject.add_argument("--input", required=True, help="HTML file to mark")
    p_inject.add_argument("--output", help="Write here instead of stdout")
    p_inject.set_defaults(func=cmd_inject)

    p_path = sub.add_parser("path", help="Show the content path a request would be fetched from")
    p_path.add_argument("cid", help=f"Trusted CID (as passed via ?{settings.cid_query_param}=)")
    p_path.add_argument("request_path", help="Request path, e.g. / or /assets/app.js")
    p_path.set_defaults(func=cmd_path)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
