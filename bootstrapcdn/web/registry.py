"""
Route registry — every URL the site answers, in one place.

The web server dispatches from this table and the sitemap publisher derives
sitemap.xml / robots.txt from it, so a route added here shows up in both.
"""

from dataclasses import dataclass
from enum import Enum


class RouteKind(Enum):
    PAGE = "page"
    DATA = "data"
    SITEMAP = "sitemap"
    ROBOTS = "robots"


@dataclass(frozen=True)
class Route:
    path: str
    kind: RouteKind
    name: str
    template: str | None = None
    hidden: bool = False


ROUTES: tuple[Route, ...] = (
    Route("/", RouteKind.PAGE, "index", template="index.html"),
    Route("/fontawesome/", RouteKind.PAGE, "fontawesome", template="fontawesome.html"),
    Route("/bootswatch/", RouteKind.PAGE, "bootswatch", template="bootswatch.html"),
    Route("/bootlint/", RouteKind.PAGE, "bootlint", template="bootlint.html"),
    Route("/alpha/", RouteKind.PAGE, "alpha", template="alpha.html"),
    Route("/legacy/", RouteKind.PAGE, "legacy", template="legacy.html"),
    Route("/showcase/", RouteKind.PAGE, "showcase", template="showcase.html"),
    Route("/integrations/", RouteKind.PAGE, "integrations", template="integrations.html"),
    Route("/data/bootstrapcdn.json", RouteKind.DATA, "data", hidden=True),
    Route("/sitemap.xml", RouteKind.SITEMAP, "sitemap", hidden=True),
    Route("/robots.txt", RouteKind.ROBOTS, "robots", hidden=True),
)


def page_routes(routes: tuple[Route, ...] = ROUTES) -> list[Route]:
    return [r for r in routes if r.kind is RouteKind.PAGE]
