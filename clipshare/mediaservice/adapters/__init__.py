from .local_fs import LocalFSMediaHost
from .s3 import S3MediaHost

__all__ = ["LocalFSMediaHost", "S3MediaHost"]
