"""
Crawler routes.

GET /robots.txt   — always
GET /sitemap.xml  — production deployments only
"""

from aiohttp import web


async def robots_txt(request: web.Request) -> web.Response:
    publisher = request.app["sitemap"]
    return web.Response(text=publisher.robots_txt(), content_type="text/plain")


async def sitemap_xml(request: web.Request) -> web.Response:
    publisher = request.app["sitemap"]
    return web.Response(text=publisher.sitemap_xml(), content_type="application/xml")
