from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from ..authservice.contracts import User
from ..authservice.deps import require_user
from ..catalog.contracts import VideoMetadata
from ..contracts import UWFResponse, uwf_ok
from .contracts import UploadResult
from .service import MediaUploadService

router = APIRouter(prefix="/api/videos", tags=["videos"])

def get_upload_service(request: Request) -> MediaUploadService:
    return request.app.state.upload_service

@router.post("/upload", response_model=UWFResponse)
async def upload_video(
    request: Request,
    video: Optional[UploadFile] = File(default=None),
    caption: Optional[str] = Form(default=None),
    song_id: Optional[str] = Form(default=None, alias="songId"),
    location: Optional[str] = Form(default=None),
    user: User = Depends(require_user),
    svc: MediaUploadService = Depends(get_upload_service),
):
    data = await svc.read_upload(video)
    record = await svc.upload(
        owner_id=user.id,
        data=data,
        filename=video.filename if video is not None else None,
        content_type=video.content_type if video is not None else None,
        metadata=VideoMetadata(caption=caption, song_id=song_id, location=location),
    )
    return uwf_ok(request, UploadResult(video=record))
