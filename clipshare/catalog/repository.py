from __future__ import annotations

import threading
from typing import List

from .contracts import VideoRecord, VideoRepoPort


class InMemoryVideoRepo(VideoRepoPort):
    """
    Process-local video metadata store.
    Not shared across processes; adequate for tests and local runs.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._videos: List[VideoRecord] = []

    def add(self, record: VideoRecord) -> VideoRecord:
        with self._lock:
            self._videos.append(record)
            return record

    def list_all(self) -> List[VideoRecord]:
        with self._lock:
            return _newest_first(self._videos)

    def list_by_owner(self, owner_id: str) -> List[VideoRecord]:
        with self._lock:
            return _newest_first(v for v in self._videos if v.owner_id == owner_id)


def _newest_first(videos) -> List[VideoRecord]:
    return sorted(videos, key=lambda v: v.uploaded_at, reverse=True)
