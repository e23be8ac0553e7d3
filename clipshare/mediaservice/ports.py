
from __future__ import annotations
from abc import ABC, abstractmethod

from .contracts import PutMediaRequest, UploadedMedia

class MediaHostPort(ABC):
    """Remote host that stores uploaded media and serves it back by URL."""

    name: str = "media"

    @abstractmethod
    async def put_media(self, req: PutMediaRequest) -> UploadedMedia: ...

    def close(self) -> None:
        return None
