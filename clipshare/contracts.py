from __future__ import annotations
import time
from typing import Any, Dict, Literal, Optional, Protocol
from pydantic import BaseModel, Field, constr

# ---------- Unified Wire Format (UWF) ----------
class ErrorPayload(BaseModel):
    type: Literal["AUTH_ERROR", "VALIDATION", "CONFLICT", "NOT_FOUND", "UPSTREAM", "INTERNAL"]
    code: constr(strip_whitespace=True, min_length=1)
    message: constr(strip_whitespace=True, min_length=1)
    details: Optional[Dict[str, Any]] = None

class MetaPayload(BaseModel):
    trace_id: Optional[str] = None
    request_id: Optional[str] = None
    duration_ms: Optional[int] = None

class UWFResponse(BaseModel):
    ok: bool
    result: Optional[Any] = None
    error: Optional[ErrorPayload] = None
    meta: MetaPayload = Field(default_factory=MetaPayload)

# ---------- Ports ----------
class ClockPort(Protocol):
    def now_utc_ts(self) -> int: ...

class SystemClock:
    def now_utc_ts(self) -> int:
        return int(time.time())

# ---------- Helpers ----------
def meta_for(request) -> MetaPayload:
    state = request.state
    started_at = getattr(state, "started_at", None)
    return MetaPayload(
        trace_id=getattr(state, "trace_id", None),
        request_id=getattr(state, "request_id", None),
        duration_ms=int((time.perf_counter() - started_at) * 1000) if started_at is not None else None,
    )

def uwf_ok(request, result: Any) -> UWFResponse:
    return UWFResponse(ok=True, result=result, error=None, meta=meta_for(request))

def uwf_err(request, error: ErrorPayload) -> UWFResponse:
    return UWFResponse(ok=False, result=None, error=error, meta=meta_for(request))
