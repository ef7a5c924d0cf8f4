"""
BootstrapCDN Web Server

aiohttp application serving the marketing pages, the JSON data endpoint,
robots.txt / sitemap.xml and static assets. Every route comes from the
route registry.
"""

import logging
from pathlib import Path

import aiohttp_jinja2
import jinja2
from aiohttp import web

from bootstrapcdn import helpers
from bootstrapcdn.config import Config, Settings, resolve_port
from bootstrapcdn.data import SnapshotCell
from bootstrapcdn.logs import access_log_format
from bootstrapcdn.sitemap import SitemapPublisher
from bootstrapcdn.web.errors import error_middleware
from bootstrapcdn.web.headers import HeaderPolicy
from bootstrapcdn.web.registry import ROUTES, Route, RouteKind
from bootstrapcdn.web.routes.data import bootstrapcdn_json
from bootstrapcdn.web.routes.pages import make_page_handler
from bootstrapcdn.web.routes.sitemap import robots_txt, sitemap_xml

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"
STATIC_PREFIX = "/assets"


@web.middleware
async def compression_middleware(request: web.Request, handler) -> web.StreamResponse:
    """gzip/deflate in-memory responses when the client accepts it."""
    response = await handler(request)
    if isinstance(response, web.Response):
        response.enable_compression()
    return response


class WebServer:
    """BootstrapCDN site: pages, data, crawler files and assets."""

    def __init__(
        self,
        config: Config,
        settings: Settings,
        host: str = "0.0.0.0",
        port: int | None = None,
        routes: tuple[Route, ...] = ROUTES,
        templates_dir: Path = TEMPLATES_DIR,
        static_dir: Path = STATIC_DIR,
    ):
        self.config = config
        self.settings = settings
        self.host = host
        self.port = port or resolve_port(settings, config)
        self.routes = routes
        self.app = web.Application(middlewares=[error_middleware(settings.mode), compression_middleware])
        self._runner: web.AppRunner | None = None

        # Store references in app for route handlers
        self.app["config"] = config
        self.app["settings"] = settings
        self.app["snapshot"] = SnapshotCell()
        self.app["sitemap"] = SitemapPublisher(settings.mode, routes=routes, site_url=config.site_url)

        HeaderPolicy(settings.mode, force_ssl=settings.force_ssl).setup(self.app)

        # Jinja2 templates with helpers in global context
        env = aiohttp_jinja2.setup(
            self.app,
            loader=jinja2.FileSystemLoader(str(templates_dir)),
            autoescape=jinja2.select_autoescape(["html"]),
            auto_reload=not settings.mode.is_production,
        )
        env.globals["helpers"] = helpers.as_namespace()

        self._setup_routes(static_dir)

    def _setup_routes(self, static_dir: Path) -> None:
        """Register one handler per registry entry, then static files."""
        for route in self.routes:
            if route.kind is RouteKind.PAGE:
                handler = make_page_handler(route)
            elif route.kind is RouteKind.DATA:
                handler = bootstrapcdn_json
            elif route.kind is RouteKind.ROBOTS:
                handler = robots_txt
            elif route.kind is RouteKind.SITEMAP:
                if not self.settings.mode.is_production:
                    continue
                handler = sitemap_xml
            else:
                raise ValueError(f"Unknown route kind: {route.kind}")
            self.app.router.add_get(route.path, handler, name=route.name, allow_head=True)

        # Static files
        self.app.router.add_static(STATIC_PREFIX, static_dir, name="static")

    async def start(self) -> None:
        """Start the web server."""
        self._runner = web.AppRunner(self.app, access_log_format=access_log_format(self.settings.mode))
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info(f"Site listening on http://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the web server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Web server stopped")
