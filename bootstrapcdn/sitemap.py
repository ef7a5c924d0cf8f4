"""
Sitemap publisher — sitemap.xml and robots.txt from the route registry.

Both documents are rendered from the same list_routes() result. In a
development deployment the root path is disallowed for crawlers so staging
instances never get indexed; it is still served normally.
"""

from enum import Enum
from xml.etree.ElementTree import Element, SubElement, tostring

from bootstrapcdn.config import DEFAULT_SITE_URL, DeploymentMode
from bootstrapcdn.web.registry import ROUTES, Route

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


class Visibility(Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"
    DISALLOWED = "disallowed"


class SitemapPublisher:
    """Derives crawler-facing documents from the registered routes."""

    def __init__(
        self,
        mode: DeploymentMode,
        routes: tuple[Route, ...] = ROUTES,
        site_url: str = DEFAULT_SITE_URL,
    ):
        self.mode = mode
        self.routes = routes
        self.site_url = site_url.rstrip("/")

    def _visibility(self, route: Route) -> Visibility:
        if route.hidden:
            return Visibility.HIDDEN
        if route.path == "/" and not self.mode.is_production:
            return Visibility.DISALLOWED
        return Visibility.VISIBLE

    def list_routes(self) -> set[tuple[str, Visibility]]:
        return {(route.path, self._visibility(route)) for route in self.routes}

    def _paths(self, visibility: Visibility) -> list[str]:
        return sorted(path for path, vis in self.list_routes() if vis is visibility)

    def sitemap_xml(self) -> str:
        """sitemaps.org urlset of every visible route."""
        urlset = Element("urlset")
        urlset.set("xmlns", _SITEMAP_NS)

        for path in self._paths(Visibility.VISIBLE):
            url_el = SubElement(urlset, "url")
            loc = SubElement(url_el, "loc")
            loc.text = self.site_url + path

        xml_body = tostring(urlset, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml_body + "\n"

    def robots_txt(self) -> str:
        """robots exclusion document; points at the sitemap in production."""
        lines = ["User-agent: *"]
        disallowed = self._paths(Visibility.DISALLOWED)
        if disallowed:
            lines.extend(f"Disallow: {path}" for path in disallowed)
        else:
            lines.append("Disallow:")
        if self.mode.is_production:
            lines.append(f"Sitemap: {self.site_url}/sitemap.xml")
        return "\n".join(lines) + "\n"
