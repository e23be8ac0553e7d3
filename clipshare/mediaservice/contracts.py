
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field, constr

from ..catalog.contracts import VideoRecord

# ---------- Common Models ----------

class PutMediaRequest(BaseModel):
    key: constr(strip_whitespace=True, min_length=1)
    data: bytes
    content_type: Optional[str] = None
    resource_type: str = "video"

class UploadedMedia(BaseModel):
    url: str
    public_id: str
    size: int
    content_type: Optional[str] = None
    etag: Optional[str] = None

class UploadResult(BaseModel):
    message: str = "Upload successful"
    video: VideoRecord

class MediaErrorCodes:
    NO_FILE = "NO_FILE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    UPLOAD_TIMEOUT = "UPLOAD_TIMEOUT"
    RECORD_FAILED = "RECORD_FAILED"
