"""
Data route — GET /data/bootstrapcdn.json

JSON map of library versions to CDN URLs. Only regenerated on restart.
"""

from aiohttp import web


async def bootstrapcdn_json(request: web.Request) -> web.Response:
    """Serve the cached snapshot (DataDerivationError → 500 via middleware)."""
    cell = request.app["snapshot"]
    body = cell.json(request.app["config"])
    return web.Response(text=body, content_type="application/json")
