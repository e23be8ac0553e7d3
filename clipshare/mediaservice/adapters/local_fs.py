
from __future__ import annotations
import asyncio
import hashlib
from pathlib import Path
from typing import Optional

from ..contracts import PutMediaRequest, UploadedMedia
from ..errors import MediaConflict, MediaValidation
from ..ports import MediaHostPort

def _safe_join(root: Path, key: str) -> Path:
    parts = [p for p in key.replace("\\", "/").split("/") if p]
    # basic traversal guard
    if not parts or any(p == ".." for p in parts):
        raise MediaValidation("invalid key (traversal detected)")
    return root.joinpath(*parts).resolve()

class LocalFSMediaHost(MediaHostPort):
    """Writes media under a local directory. For development and tests."""

    name = "localfs"

    def __init__(self, root_dir: str, public_base_url: Optional[str] = None):
        self.root = Path(root_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.public_base_url = (public_base_url or self.root.as_uri()).rstrip("/")

    def _path_for(self, key: str) -> Path:
        return _safe_join(self.root, key)

    async def put_media(self, req: PutMediaRequest) -> UploadedMedia:
        path = self._path_for(req.key)
        if path.exists():
            raise MediaConflict("media already exists")

        def write_sync() -> str:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(req.data)
            return hashlib.md5(req.data).hexdigest()

        etag = await asyncio.to_thread(write_sync)
        rel = path.relative_to(self.root).as_posix()
        return UploadedMedia(
            url=f"{self.public_base_url}/{rel}",
            public_id=rel,
            size=len(req.data),
            content_type=req.content_type,
            etag=etag,
        )
