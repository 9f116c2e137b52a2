"""
HTTP server for Farm Catalog.

  - GET /                   product overview (one card per product)
  - GET /overview           same page as /
  - GET /product?id=<n>     product page for the record at position n
  - GET /api                catalog data file, byte for byte
  - GET /health             liveness check
  - anything else           404
"""

import json
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Dict, Optional
from urllib.parse import parse_qs, urlsplit

from catalog import CatalogStore
from config import Config
from logging_util import log
from version import VERSION

from web.template_engine import TemplateSet, render, render_overview

NOT_FOUND_HTML = "<h1>Page not found!</h1>"


@dataclass(frozen=True)
class AppContext:
    """Read-only state shared by all requests. Built once at startup."""

    cfg: Config
    catalog: CatalogStore
    templates: TemplateSet

    @classmethod
    def build(cls, cfg: Config) -> "AppContext":
        """Load catalog and templates. CatalogError / TemplateError propagate."""
        templates = TemplateSet.load(cfg.template_dir)
        catalog = CatalogStore.load(cfg.data_path)
        return cls(cfg=cfg, catalog=catalog, templates=templates)


class WebServer:
    """Wraps the HTTP server and builds the pages from an AppContext."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx
        self._httpd: Optional[HTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self):
        """(host, port) actually bound; port is resolved when 0 was configured."""
        return self._httpd.server_address if self._httpd else None

    # ------------------------------------------------------------------
    # Start / stop
    # ------------------------------------------------------------------

    def _bind(self) -> HTTPServer:
        if self._httpd is None:
            cfg = self.ctx.cfg
            self._httpd = HTTPServer((cfg.host, cfg.port), self._make_handler())
            host, port = self._httpd.server_address[:2]
            log("info", f"Listening to requests on http://{host}:{port}")
        return self._httpd

    def serve_forever(self):
        """Serve in the calling thread until shutdown() or KeyboardInterrupt."""
        self._bind().serve_forever()

    def start(self) -> threading.Thread:
        """Serve on a daemon thread and return it."""
        httpd = self._bind()
        self._thread = threading.Thread(target=httpd.serve_forever, daemon=True)
        self._thread.start()
        return self._thread

    def shutdown(self):
        if self._httpd is None:
            return
        if self._thread is not None:
            self._httpd.shutdown()
            self._thread.join(timeout=5)
            self._thread = None
        self._httpd.server_close()
        self._httpd = None
        log("info", "HTTP server stopped")

    # ------------------------------------------------------------------
    # Request handler
    # ------------------------------------------------------------------

    def _make_handler(self):
        srv = self

        class Handler(BaseHTTPRequestHandler):
            def log_message(self, fmt, *args):
                log("debug", f"{self.address_string()} {fmt % args}")

            def _send(self, body: bytes, content_type: str, status=200,
                      headers: Dict[str, str] = None):
                self.send_response(status)
                self.send_header("Content-Type", content_type)
                self.send_header("Content-Length", str(len(body)))
                for k, v in (headers or {}).items():
                    self.send_header(k, v)
                self.end_headers()
                self.wfile.write(body)

            def _html(self, html: str, status=200, headers: Dict[str, str] = None):
                self._send(html.encode("utf-8"), "text/html; charset=utf-8", status, headers)

            def _json(self, data, status=200):
                self._send(json.dumps(data, indent=2).encode("utf-8"), "application/json", status)

            def do_GET(self):
                url = urlsplit(self.path)
                path = url.path
                query = parse_qs(url.query)

                if path in ("/", "/overview"):
                    self._html(srv.overview_page())
                elif path == "/product":
                    self._html(srv.product_page(query.get("id", [None])[0]))
                elif path == "/api":
                    self._send(srv.ctx.catalog.raw, "application/json")
                elif path == "/health":
                    self._json(srv.health())
                else:
                    self._html(NOT_FOUND_HTML, 404, {"my-own-header": "hello-world"})

        return Handler

    # ------------------------------------------------------------------
    # Page builders
    # ------------------------------------------------------------------

    def overview_page(self) -> str:
        tpl = self.ctx.templates
        cards = (render(tpl.card, p) for p in self.ctx.catalog)
        return render_overview(tpl.overview, cards)

    def product_page(self, product_id) -> str:
        product = self.ctx.catalog.get(product_id)
        if product is None:
            log("debug", f"No product at position {product_id!r}, rendering undefined fields")
        return render(self.ctx.templates.product, product)

    def health(self) -> dict:
        return {"status": "ok", "version": VERSION, "products": len(self.ctx.catalog)}
