"""
responses.py — JSON envelope shared by every endpoint:
{success, data | error, message?, timestamp}
"""

from datetime import datetime, timezone

from fastapi.responses import JSONResponse


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def success_response(data=None, message: str | None = None, status_code: int = 200) -> JSONResponse:
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    body["timestamp"] = _timestamp()
    return JSONResponse(status_code=status_code, content=body)


def error_response(error: str, status_code: int = 400, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "timestamp": _timestamp()},
        headers=headers,
    )
