# FILE: hims_pharmacy/api/response.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from hims_pharmacy.services.errors import PharmacyError


def ok(data: Any = None, *, status_code: int = 200) -> JSONResponse:
    """{"ok": true, "data": ...}; Decimal/date are made JSON-safe."""
    payload: Dict[str, Any] = {"ok": True, "data": data}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def err(
    msg: str = "Something went wrong",
    *,
    status_code: int = 400,
    code: Optional[str] = None,
    details: Any = None,
) -> JSONResponse:
    """{"ok": false, "error": {"msg", "code", "details"}}"""
    payload: Dict[str, Any] = {
        "ok": False,
        "error": {
            "msg": msg,
            "code": code,
            "details": details,
        },
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def pharmacy_err(exc: PharmacyError, *, status_code: int, details: Any = None) -> JSONResponse:
    return err(msg=str(exc), status_code=status_code, code=exc.code, details=details)
