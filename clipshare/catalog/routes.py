from __future__ import annotations
from fastapi import APIRouter, Depends, Request

from ..contracts import UWFResponse, uwf_ok
from .contracts import VideoList
from .service import VideoCatalog

router = APIRouter(prefix="/api", tags=["videos"])

def get_catalog(request: Request) -> VideoCatalog:
    return request.app.state.catalog

@router.get("/videos", response_model=UWFResponse)
def list_videos(request: Request, catalog: VideoCatalog = Depends(get_catalog)):
    videos = catalog.list_all()
    return uwf_ok(request, VideoList(items=videos, count=len(videos)))

@router.get("/users/{user_id}/videos", response_model=UWFResponse)
def list_user_videos(user_id: str, request: Request, catalog: VideoCatalog = Depends(get_catalog)):
    videos = catalog.list_by_owner(user_id)
    return uwf_ok(request, VideoList(items=videos, count=len(videos)))
