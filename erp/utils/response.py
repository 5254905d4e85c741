"""
Standard API envelope: {"success": bool, "data": ..., "message": str}.
"""

from typing import Any

from pydantic import BaseModel


def _plain(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: _plain(value) for key, value in data.items()}
    return data


def success_response(data: Any = None, message: str = "Success") -> dict:
    return {"success": True, "data": _plain(data), "message": message}


def error_response(message: str = "Error", data: Any = None) -> dict:
    return {"success": False, "data": _plain(data), "message": message}
