from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader
from django.conf import settings
from django.utils.module_loading import import_string

from club_access.common.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


class PhotoUploadError(UpstreamFailure):
    default_detail = "The photo could not be uploaded."
    error_code = "ERR_UPLOAD"


@dataclass(frozen=True)
class UploadedPhoto:
    url: str
    public_id: str


class PhotoStore:
    """Narrow interface over wherever member photos live.

    ``upload`` returns the public URL of the stored image; ``delete`` takes
    that same URL back.
    """

    def upload(self, file) -> UploadedPhoto:
        raise NotImplementedError

    def delete(self, url: str) -> dict[str, Any]:
        raise NotImplementedError


def public_id_from_url(url: str) -> str:
    """Recover the Cloudinary public id from a delivery URL.

    ``https://res.cloudinary.com/<cloud>/image/upload/v1712/members/abc.jpg``
    gives ``members/abc``.
    """
    path = urlparse(url).path
    _, marker, tail = path.partition("/upload/")
    if not marker:
        tail = path.rsplit("/", 1)[-1]
    parts = [p for p in tail.split("/") if p]
    if parts and parts[0].startswith("v") and parts[0][1:].isdigit():
        parts = parts[1:]
    if not parts:
        return ""
    parts[-1] = parts[-1].rsplit(".", 1)[0]
    return "/".join(parts)


class CloudinaryPhotoStore(PhotoStore):
    """Cloudinary-backed store that retries uploads a fixed number of times."""

    def __init__(
        self,
        *,
        folder: str | None = None,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
    ):
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self.folder = folder if folder is not None else settings.CLOUDINARY_FOLDER
        self.max_attempts = max_attempts or settings.PHOTO_UPLOAD_MAX_ATTEMPTS
        self.retry_delay = (
            settings.PHOTO_UPLOAD_RETRY_DELAY if retry_delay is None else retry_delay
        )

    def upload(self, file) -> UploadedPhoto:
        for attempt in range(1, self.max_attempts + 1):
            try:
                if hasattr(file, "seek"):
                    file.seek(0)
                result = cloudinary.uploader.upload(
                    file,
                    folder=self.folder,
                    resource_type="image",
                )
            except Exception as exc:  # noqa: BLE001 - SDK raises assorted errors
                logger.warning(
                    "Photo upload failed (attempt %s/%s): %s",
                    attempt,
                    self.max_attempts,
                    exc,
                )
                if attempt < self.max_attempts:
                    time.sleep(self.retry_delay)
                continue
            url = (result or {}).get("secure_url")
            if not url:
                logger.error("Photo upload returned no URL: %s", result)
                raise PhotoUploadError
            logger.info("Photo uploaded on attempt %s: %s", attempt, url)
            return UploadedPhoto(url=url, public_id=result.get("public_id", ""))
        raise PhotoUploadError

    def delete(self, url: str) -> dict[str, Any]:
        public_id = public_id_from_url(url)
        result = cloudinary.uploader.destroy(public_id)
        logger.info("Photo %s deleted: %s", public_id, result)
        return result


def get_photo_store() -> PhotoStore:
    """Instantiate the store configured in ``PHOTO_STORE_BACKEND``."""
    return import_string(settings.PHOTO_STORE_BACKEND)()
