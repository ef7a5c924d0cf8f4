"""
Page routes — GET /, /fontawesome/, /bootswatch/, ...

One handler per PAGE entry in the route registry. Each renders its template
with the loaded config; output depends only on the config and the path.
"""

import aiohttp_jinja2
from aiohttp import web

from bootstrapcdn.web.registry import Route


def page_context(request: web.Request, route: Route) -> dict:
    config = request.app["config"]
    return {
        "config": config,
        "site": config.extra,
        "page": route.name,
        "path": route.path,
        "mode": request.app["settings"].mode.value,
    }


def make_page_handler(route: Route):
    """Build the GET handler for one registered page."""

    async def handler(request: web.Request) -> web.Response:
        return aiohttp_jinja2.render_template(route.template, request, page_context(request, route))

    handler.__name__ = f"{route.name}_page"
    return handler
