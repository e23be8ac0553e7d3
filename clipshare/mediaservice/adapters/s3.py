
from __future__ import annotations
import asyncio
from typing import Optional

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..contracts import PutMediaRequest, UploadedMedia
from ..errors import MediaUpstream, MediaValidation
from ..ports import MediaHostPort

class S3MediaHost(MediaHostPort):
    """Media host on S3 or any S3-compatible object store."""

    name = "s3"

    def __init__(self, bucket: str, region: Optional[str] = None,
                 endpoint_url: Optional[str] = None, force_path_style: bool = False,
                 public_base_url: Optional[str] = None, client=None):
        self.s3 = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            config=BotoConfig(s3={"addressing_style": "path" if force_path_style else "auto"})
        )
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    def _url_for(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        endpoint = self.s3.meta.endpoint_url.rstrip("/")
        return f"{endpoint}/{self.bucket}/{key}"

    async def put_media(self, req: PutMediaRequest) -> UploadedMedia:
        key = req.key.strip("/")
        if ".." in key.split("/"):
            raise MediaValidation("invalid key")

        kwargs = {"Bucket": self.bucket, "Key": key, "Body": req.data}
        if req.content_type:
            kwargs["ContentType"] = req.content_type

        try:
            resp = await asyncio.to_thread(self.s3.put_object, **kwargs)
        except (ClientError, BotoCoreError) as e:
            raise MediaUpstream(str(e)) from e

        return UploadedMedia(
            url=self._url_for(key),
            public_id=key,
            size=len(req.data),
            content_type=req.content_type,
            etag=(resp.get("ETag") or "").strip('"') or None,
        )

    def close(self) -> None:
        self.s3.close()
