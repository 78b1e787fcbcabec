"""Error handling and request helpers shared by the routes."""

import json
import logging

from aiohttp import web

from jobly.db.database import Database
from jobly.errors import BadRequestError, ExpressError

logger = logging.getLogger(__name__)

DB_KEY = web.AppKey("db", Database)


def error_response(message, status: int) -> web.Response:
    """Shape an error the same way for every route."""
    return web.json_response(
        {"error": {"message": message, "status": status}}, status=status
    )


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Translate raised errors into JSON responses with their status code."""
    try:
        return await handler(request)
    except ExpressError as err:
        return error_response(err.message, err.status)
    except web.HTTPException as err:
        if err.status < 400:
            raise
        return error_response(err.reason, err.status)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal Server Error", 500)


async def read_json(request: web.Request) -> dict:
    """Read a JSON object body, raising BadRequestError otherwise."""
    try:
        body = await request.json()
    except json.JSONDecodeError as e:
        raise BadRequestError("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body
