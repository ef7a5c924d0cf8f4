"""
Request-boundary error handling.

Any exception escaping a handler becomes a 500 for that request only. In
development the traceback is shown to the client; in production it is only
logged. 5xx HTTP exceptions get the same treatment; 3xx and 4xx pass
through to aiohttp untouched.
"""

import logging
import traceback

from aiohttp import web

from bootstrapcdn.config import DeploymentMode
from bootstrapcdn.data import DataDerivationError

logger = logging.getLogger(__name__)


def _server_error(mode: DeploymentMode, detail: str) -> web.Response:
    if mode.is_production:
        return web.Response(text="500: Internal Server Error", status=500)
    return web.Response(text=f"500: Internal Server Error\n\n{detail}", status=500)


def error_middleware(mode: DeploymentMode):
    """Build the error middleware for a deployment mode."""

    @web.middleware
    async def middleware(request: web.Request, handler) -> web.StreamResponse:
        try:
            return await handler(request)
        except web.HTTPServerError as e:
            # Raised by aiohttp_jinja2 for a missing template, among others
            logger.exception(f"{request.method} {request.path}: server error: {e.text}")
            return _server_error(mode, f"{e.text}\n\n{traceback.format_exc()}")
        except web.HTTPException:
            raise
        except DataDerivationError as e:
            logger.error(f"{request.method} {request.path}: data derivation failed: {e}")
            body = {"error": "data unavailable"}
            if not mode.is_production:
                body["detail"] = str(e)
            return web.json_response(body, status=500)
        except Exception as e:
            logger.exception(f"{request.method} {request.path}: unhandled error: {e}")
            return _server_error(mode, traceback.format_exc())

    return middleware
