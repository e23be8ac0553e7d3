from .contracts import VideoList, VideoMetadata, VideoRecord, VideoRepoPort
from .repository import InMemoryVideoRepo
from .store_mongo import MongoVideoRepo
from .service import VideoCatalog
from .routes import router as catalog_router

__all__ = [
    "VideoList",
    "VideoMetadata",
    "VideoRecord",
    "VideoRepoPort",
    "InMemoryVideoRepo",
    "MongoVideoRepo",
    "VideoCatalog",
    "catalog_router",
]
