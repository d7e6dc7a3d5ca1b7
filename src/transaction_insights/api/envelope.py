"""Response envelope helpers.

Every response is ``{"success": true, "data": ...}``, ``{"success": true,
"message": ...}`` or ``{"success": false, "error": ...}``.
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def success(data: Any) -> dict[str, Any]:
    return {"success": True, "data": _jsonable(data)}


def message(text: str) -> dict[str, Any]:
    return {"success": True, "message": text}


def failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})
