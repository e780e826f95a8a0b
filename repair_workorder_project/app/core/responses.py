"""
统一响应结构

{success: bool, message?: str, data?: any, action?: str, query_info?: dict}
只输出实际传入的字段。
"""
from typing import Any, Dict, Optional

_UNSET = object()


def success_response(message: Optional[str] = None, data: Any = _UNSET, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not _UNSET:
        body["data"] = data
    body.update(extra)
    return body


def error_response(message: Any, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    body.update(extra)
    return body
