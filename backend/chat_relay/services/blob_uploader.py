"""Copy provider-hosted images into the Firebase Storage bucket.

Flow:
1. Download the image bytes from the provider URL
2. Upload them as ``{uuid}.{ext}`` keeping the source content type
3. Hand back a read-only signed URL with a fixed expiry

Objects are never overwritten or deleted here. A failed upload may leave a
partial object behind.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime

import httpx

from ..errors import FetchError, SignError

logger = logging.getLogger(__name__)


def object_name_for(image_url: str) -> str:
    # Extension is whatever follows the last dot of the URL without its query
    extension = image_url.split("?", 1)[0].rsplit(".", 1)[-1]
    return f"{uuid.uuid4()}.{extension}"


class ImageUploader:
    def __init__(self, http_client: httpx.AsyncClient, bucket, expires_at: datetime):
        self.http_client = http_client
        self.bucket = bucket
        self.expires_at = expires_at

    async def _fetch(self, image_url: str) -> httpx.Response:
        try:
            response = await self.http_client.get(image_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch image {image_url}: {e}") from e
        return response

    async def upload(self, image_url: str) -> str:
        response = await self._fetch(image_url)
        filename = object_name_for(image_url)
        content_type = response.headers.get("content-type")
        blob = self.bucket.blob(filename)

        logger.info("[storage->] Uploading %s bytes=%d content_type=%s", filename, len(response.content), content_type)
        try:
            await asyncio.to_thread(blob.upload_from_string, response.content, content_type=content_type)
        except Exception:
            logger.exception("[storage] Error uploading image %s", filename)
            raise

        try:
            signed_url = await asyncio.to_thread(
                blob.generate_signed_url, expiration=self.expires_at, method="GET"
            )
        except Exception as e:
            logger.exception("[storage] Error signing URL for %s", filename)
            raise SignError(f"Failed to sign URL for {filename}: {e}") from e
        logger.info("[storage] Uploaded %s (signed until %s)", filename, self.expires_at.isoformat())
        return signed_url
