"""The CommLink web platform: pages, static files and the NEAR balance endpoint."""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import parse_qs

import uvicorn
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from akaia.near import MAINNET_RPC_URL, NearAccountId, get_balance
from akaia.shell import render_extension_shell

DEFAULT_SITE_ADDR = "127.0.0.1:3000"
DEFAULT_SITE_ROOT = "target/site"
IMPORT_MAP = '{"imports": {}}'
DESKTOP_PROPS = '{ "name": "akaia" }'

DASHBOARD_BODY = "<h1>Hello, World!</h1>"
NOT_FOUND_BODY = "<h1>Not Found</h1>"


def render_page(body: str) -> str:
    """Wrap a page body in the platform's HTML document."""
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        '<meta charset="utf-8"/>\n'
        "<title>CommLink</title>\n"
        f'<script type="importmap">{IMPORT_MAP}</script>\n'
        '<script type="module" id="framework" src="/static/packages/framework/index.js"></script>\n'
        '<script id="unocss" src="/static/packages/uno_attributify.runtime.js"></script>\n'
        '<link id="leptos" rel="stylesheet" href="/app/akaia_commlink.css"/>\n'
        "</head>\n"
        '<body m="0" h="100vh" flex="~ col">\n'
        '<main p="4" h="100%" flex="~ col" items="center" justify="center">\n'
        f"{body}\n"
        "</main>\n</body>\n</html>\n"
    )


def _parse_account_id(content_type: str, raw: bytes) -> str | None:
    if "application/json" in content_type:
        try:
            data = json.loads(raw or b"null")
        except ValueError:
            return None
        value = data.get("account_id") if isinstance(data, dict) else None
        return value if isinstance(value, str) else None
    values = parse_qs(raw.decode("utf-8", errors="replace"), keep_blank_values=True).get(
        "account_id"
    )
    return values[-1] if values else None


def create_app(site_root: str | os.PathLike[str], rpc_url: str = MAINNET_RPC_URL) -> Starlette:
    """Build the web application serving pages and files from ``site_root``."""
    root = Path(site_root)

    async def dashboard(request: Request) -> Response:
        return HTMLResponse(render_page(DASHBOARD_BODY))

    async def error_screen(request: Request) -> Response:
        return HTMLResponse(render_page(NOT_FOUND_BODY), status_code=404)

    async def desktop(request: Request) -> Response:
        shell = render_extension_shell(
            route=request.path_params["app_route"],
            query=dict(request.query_params),
            props=DESKTOP_PROPS,
            hostname=request.url.hostname,
        )
        return HTMLResponse(render_page(shell))

    async def favicon(request: Request) -> Response:
        path = root / "favicon.ico"
        if not path.is_file():
            return PlainTextResponse("Not Found", status_code=404)
        return FileResponse(path)

    async def balance(request: Request) -> Response:
        account_id = _parse_account_id(
            request.headers.get("content-type", ""), await request.body()
        )
        if account_id is None:
            return JSONResponse({"error": "missing account_id"}, status_code=400)
        result = await run_in_threadpool(get_balance, NearAccountId(account_id), rpc_url)
        return JSONResponse(None if result is None else result.to_dict())

    routes = [
        Route("/", dashboard),
        Route("/favicon.ico", favicon),
        Route("/api/near_account/balance", balance, methods=["POST"]),
        Mount("/app", app=StaticFiles(directory=root / "app", check_dir=False)),
        Mount("/static", app=StaticFiles(directory=root, check_dir=False)),
        Route("/error", error_screen),
        Route("/{app_route}", desktop),
        Route("/{any:path}", dashboard),
    ]
    return Starlette(routes=routes, middleware=[Middleware(GZipMiddleware)])


def main(argv: Sequence[str] | None = None) -> int:
    """Serve the platform until interrupted."""
    parser = argparse.ArgumentParser(prog="akaia-platform")
    parser.add_argument(
        "--site-addr", default=os.environ.get("LEPTOS_SITE_ADDR", DEFAULT_SITE_ADDR)
    )
    parser.add_argument(
        "--site-root", default=os.environ.get("LEPTOS_SITE_ROOT", DEFAULT_SITE_ROOT)
    )
    parser.add_argument("--rpc-url", default=MAINNET_RPC_URL)
    options = parser.parse_args(argv)

    host, _, port = options.site_addr.rpartition(":")
    if not host or not port.isdigit():
        parser.error(f"invalid site address: {options.site_addr!r}")

    print(f"\n\n[ 📡 ] Listening on http://{options.site_addr} ...\n\n")
    uvicorn.run(
        create_app(options.site_root, options.rpc_url), host=host.strip("[]"), port=int(port)
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())