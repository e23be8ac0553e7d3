from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Protocol
from pydantic import BaseModel, Field

# ---------- Domain Models ----------
class VideoMetadata(BaseModel):
    caption: Optional[str] = None
    song_id: Optional[str] = None
    location: Optional[str] = None

class VideoRecord(VideoMetadata):
    id: str
    owner_id: Optional[str] = None
    url: str
    public_id: str = Field(..., description="Reference of the asset on the media host")
    uploaded_at: datetime

class VideoList(BaseModel):
    items: List[VideoRecord]
    count: int

# ---------- Ports ----------
class VideoRepoPort(Protocol):
    """Video metadata storage. Listings come back newest first."""
    def add(self, record: VideoRecord) -> VideoRecord: ...
    def list_all(self) -> List[VideoRecord]: ...
    def list_by_owner(self, owner_id: str) -> List[VideoRecord]: ...
