from __future__ import annotations
import logging
from typing import List

from ..errors import InternalError
from .contracts import VideoRecord, VideoRepoPort

log = logging.getLogger("catalog")

class VideoCatalog:
    """Read-only queries over stored video metadata."""
    def __init__(self, repo: VideoRepoPort):
        self.repo = repo

    def list_all(self) -> List[VideoRecord]:
        try:
            videos = self.repo.list_all()
        except Exception as ex:
            log.exception("catalog.list_all err")
            raise InternalError("Failed to fetch videos") from ex
        log.info("catalog.list_all ok count=%s", len(videos))
        return videos

    def list_by_owner(self, owner_id: str) -> List[VideoRecord]:
        try:
            videos = self.repo.list_by_owner(owner_id)
        except Exception as ex:
            log.exception("catalog.list_by_owner err owner_id=%s", owner_id)
            raise InternalError("Failed to fetch videos") from ex
        log.info("catalog.list_by_owner ok owner_id=%s count=%s", owner_id, len(videos))
        return videos
