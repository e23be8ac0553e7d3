
from __future__ import annotations
import asyncio
import logging
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Callable, Optional

from opentelemetry import trace

from ..authservice.contracts import UserStorePort
from ..catalog.contracts import VideoMetadata, VideoRecord, VideoRepoPort
from ..errors import ClipshareError, InternalError, ValidationError
from .contracts import MediaErrorCodes, PutMediaRequest
from .ports import MediaHostPort

log = logging.getLogger("mediaservice")
tracer = trace.get_tracer("mediaservice")

@contextmanager
def _span(name: str, **attrs):
    with tracer.start_as_current_span(name) as span:
        for k, v in attrs.items():
            if v is not None:
                span.set_attribute(f"media.{k}", v)
        yield span

class MediaUploadService:
    """
    Forwards an uploaded payload to the media host, then records the
    returned URL and reference as a VideoRecord.

    The host call is awaited once and bounded by `timeout_seconds`; a slow
    or failing host surfaces as InternalError.
    """
    def __init__(
        self,
        *,
        host: MediaHostPort,
        videos: VideoRepoPort,
        users: Optional[UserStorePort] = None,
        timeout_seconds: float = 120.0,
        max_upload_bytes: Optional[int] = None,
        key_prefix: str = "videos",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.host = host
        self.videos = videos
        self.users = users
        self.timeout_seconds = timeout_seconds
        self.max_upload_bytes = max_upload_bytes
        self.key_prefix = key_prefix.strip("/")
        self.now = now or _utcnow

    async def upload(
        self,
        *,
        owner_id: Optional[str],
        data: Optional[bytes],
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        metadata: Optional[VideoMetadata] = None,
    ) -> VideoRecord:
        if not data:
            raise ValidationError("No file uploaded", code=MediaErrorCodes.NO_FILE)
        if self.max_upload_bytes is not None and len(data) > self.max_upload_bytes:
            raise self._too_large()

        req = PutMediaRequest(key=self._key_for(filename), data=data, content_type=content_type)
        t0 = time.time()
        with _span("media.put", host=self.host.name, key=req.key, size=len(data)):
            try:
                media = await asyncio.wait_for(self.host.put_media(req), timeout=self.timeout_seconds)
            except asyncio.TimeoutError as ex:
                log.error("media.put timeout host=%s key=%s timeout_s=%s", self.host.name, req.key, self.timeout_seconds)
                raise InternalError("Upload timed out", code=MediaErrorCodes.UPLOAD_TIMEOUT) from ex
            except Exception as ex:
                log.exception("media.put err host=%s key=%s", self.host.name, req.key)
                raise InternalError("Upload failed", code=MediaErrorCodes.UPLOAD_FAILED) from ex
        dur_ms = int((time.time() - t0) * 1000)
        log.info("media.put ok host=%s key=%s size=%s url=%s dur_ms=%s",
                 self.host.name, req.key, media.size, media.url, dur_ms)

        return self.record_video(owner_id, media.url, media.public_id, metadata or VideoMetadata())

    async def read_upload(self, upload) -> Optional[bytes]:
        """
        Reads an UploadFile-like object without buffering more than one byte
        past `max_upload_bytes`. A declared size over the cap is refused
        before anything is read.
        """
        if upload is None:
            return None
        limit = self.max_upload_bytes
        if limit is None:
            return await upload.read()
        declared = getattr(upload, "size", None)
        if declared is not None and declared > limit:
            log.info("media.read rejected declared_size=%s max_bytes=%s", declared, limit)
            raise self._too_large()
        return await upload.read(limit + 1)

    def record_video(
        self,
        owner_id: Optional[str],
        media_url: str,
        media_ref: str,
        metadata: VideoMetadata,
    ) -> VideoRecord:
        record = VideoRecord(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            url=media_url,
            public_id=media_ref,
            uploaded_at=self.now(),
            **metadata.model_dump(),
        )
        try:
            self.videos.add(record)
        except ClipshareError:
            raise
        except Exception as ex:
            log.exception("media.record err owner_id=%s public_id=%s", owner_id, media_ref)
            raise InternalError("Upload failed", code=MediaErrorCodes.RECORD_FAILED) from ex

        # counter is derived data; the stored video stands even if the bump fails
        if owner_id and self.users is not None:
            try:
                self.users.increment_video_count(owner_id)
            except Exception:
                log.exception("media.record counter err owner_id=%s video_id=%s", owner_id, record.id)
        log.info("media.record ok video_id=%s owner_id=%s", record.id, owner_id)
        return record

    def _too_large(self) -> ValidationError:
        return ValidationError(
            "File too large",
            code=MediaErrorCodes.FILE_TOO_LARGE,
            details={"max_bytes": self.max_upload_bytes},
        )

    def _key_for(self, filename: Optional[str]) -> str:
        suffix = PurePosixPath(filename or "").suffix.lower()
        name = f"{uuid.uuid4().hex}{suffix}"
        return f"{self.key_prefix}/{name}" if self.key_prefix else name

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
