"""
Response header policy.

Hooked into aiohttp's on_response_prepare signal, so it runs for every
response (pages, JSON, static files, 404s and 500s) after the handler has
finished and before the status line and headers are written.

Also provides the HTTPS-enforcement middleware used behind a TLS-terminating
proxy (Heroku-style X-Forwarded-Proto).
"""

import logging
import time
from email.utils import formatdate

from aiohttp import web

from bootstrapcdn.config import DeploymentMode

logger = logging.getLogger(__name__)

PAGE_MAX_AGE = 60 * 60
STATIC_MAX_AGE = 30 * 24 * 60 * 60
HSTS_MAX_AGE = 10886400

HELLO_HUMAN = (
    "You must be bored. You should work for us. "
    "Email jdorfman+theheader@maxcdn.com or @jdorfman on Twitter."
)

CSP_DIRECTIVES: dict[str, list[str]] = {
    "default-src": ["'none'"],
    "script-src": [
        "'self'",
        "'unsafe-inline'",
        "maxcdn.bootstrapcdn.com",
        "www.google-analytics.com",
        "code.jquery.com",
        "platform.twitter.com",
        "cdn.syndication.twimg.com",
        "api.github.com",
    ],
    "style-src": [
        "'self'",
        "'unsafe-inline'",
        "maxcdn.bootstrapcdn.com",
        "fonts.googleapis.com",
        "platform.twitter.com",
    ],
    "img-src": [
        "'self'",
        "data:",
        "www.google-analytics.com",
        "bootswatch.com",
        "syndication.twitter.com",
        "pbs.twimg.com",
        "platform.twitter.com",
        "analytics.twitter.com",
        "stats.g.doubleclick.net",
    ],
    "font-src": ["'self'", "maxcdn.bootstrapcdn.com", "fonts.gstatic.com"],
    "manifest-src": ["'self'"],
    "frame-src": ["'self'", "platform.twitter.com", "syndication.twitter.com", "ghbtns.com"],
    "child-src": ["'self'", "platform.twitter.com", "syndication.twitter.com", "ghbtns.com"],
    "report-uri": [
        "https://d063bdf998559129f041de1efd2b41a5.report-uri.io/r/default/csp/enforce",
    ],
}


def build_csp(directives: dict[str, list[str]] = CSP_DIRECTIVES) -> str:
    return "; ".join(f"{name} {' '.join(sources)}" for name, sources in directives.items())


def _http_date(timestamp: float) -> str:
    return formatdate(timestamp, usegmt=True)


def _is_static(request: web.Request) -> bool:
    route = request.match_info.route
    return isinstance(getattr(route, "resource", None), web.StaticResource)


class HeaderPolicy:
    """Caching, identification and security headers for every response."""

    def __init__(self, mode: DeploymentMode, force_ssl: bool = False):
        self.mode = mode
        self.force_ssl = force_ssl
        self.csp = build_csp()

    @property
    def enforce_https(self) -> bool:
        """Only meaningful in production, where TLS is terminated upstream."""
        return self.mode.is_production and self.force_ssl

    def apply(self, request: web.Request, response: web.StreamResponse) -> None:
        headers = response.headers
        now = time.time()
        max_age = STATIC_MAX_AGE if _is_static(request) else PAGE_MAX_AGE

        # Caching
        headers["Cache-Control"] = f"public, max-age={max_age}"
        headers["Expires"] = _http_date(now + max_age)
        headers.setdefault("Last-Modified", _http_date(now))
        headers["Accept-Ranges"] = "bytes"

        # Identification
        headers["X-Powered-By"] = "MaxCDN"
        headers["X-Hello-Human"] = HELLO_HUMAN
        headers.pop("Server", None)

        # Security
        headers["Content-Security-Policy"] = self.csp
        headers["X-Frame-Options"] = "DENY"
        headers["X-Content-Type-Options"] = "nosniff"
        headers["X-XSS-Protection"] = "1; mode=block"
        headers["X-Download-Options"] = "noopen"
        if self.enforce_https:
            headers["Strict-Transport-Security"] = (
                f"max-age={HSTS_MAX_AGE}; includeSubDomains; preload"
            )

    async def on_response_prepare(self, request: web.Request, response: web.StreamResponse) -> None:
        self.apply(request, response)

    def setup(self, app: web.Application) -> None:
        """Register the signal handler (and HTTPS redirect when enforced)."""
        app.on_response_prepare.append(self.on_response_prepare)
        if self.enforce_https:
            app.middlewares.append(https_redirect_middleware)
            logger.info("HTTPS enforcement enabled (X-Forwarded-Proto)")


@web.middleware
async def https_redirect_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Redirect plain-HTTP requests forwarded by the proxy to https."""
    if request.headers.get("X-Forwarded-Proto", "").lower() != "https":
        raise web.HTTPMovedPermanently(request.url.with_scheme("https"))
    return await handler(request)
