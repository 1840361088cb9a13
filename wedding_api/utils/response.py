from typing import Any

from fastapi.responses import JSONResponse, Response

from wedding_api.config import settings

CORS_ALLOW_METHODS = "GET,POST,OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, x-admin-passcode"


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def add_cors_headers(response: Response) -> Response:
    response.headers["Access-Control-Allow-Origin"] = settings.cors_allow_origin
    response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
    return response


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def error_response(message: str, data: Any = None) -> dict:
    return {"status": "error", "data": data, "message": message}
