"""Unsigned image uploads to Cloudinary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from fittrack.config.settings import Settings

logger = logging.getLogger(__name__)

MISSING_IMAGE_CONFIG = "Faltan variables de entorno de Cloudinary"
UPLOAD_FAILED = "Error al subir imagen a Cloudinary"
DELETE_FAILED = "Error al eliminar imagen de Cloudinary"


class ImageUploadError(RuntimeError):
    """Raised when the image host rejects or cannot be reached."""


@dataclass(frozen=True)
class UploadedImage:
    """A hosted image.

    ``delete_token`` is only returned when the upload preset enables it and
    is valid for ten minutes after the upload.
    """

    url: str
    delete_token: Optional[str] = None


class ImageUploader:
    """Uploads images with a pre-shared unsigned upload preset."""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.Client] = None,
    ):
        self.settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=settings.backend.timeout,
            follow_redirects=True,
        )

    def __enter__(self) -> "ImageUploader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _endpoint(self, action: str) -> str:
        images = self.settings.images
        if not images.cloud_name or not images.upload_preset:
            raise ImageUploadError(MISSING_IMAGE_CONFIG)
        return f"{images.api_base.rstrip('/')}/{images.cloud_name}/{action}"

    def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
    ) -> UploadedImage:
        """
        Upload an image and return its hosted URL.

        Args:
            content: Raw image bytes
            filename: Original file name
            content_type: MIME type, e.g. "image/jpeg"

        Returns:
            UploadedImage with the secure URL

        Raises:
            ImageUploadError: On missing configuration, transport failure,
                non-2xx status or a response without ``secure_url``
        """
        url = self._endpoint("image/upload")
        logger.debug("Uploading %s (%d bytes)", filename, len(content))
        try:
            response = self._http.post(
                url,
                data={"upload_preset": self.settings.images.upload_preset},
                files={"file": (filename, content, content_type)},
            )
        except httpx.RequestError as e:
            logger.error("Image upload failed: %s", e)
            raise ImageUploadError(UPLOAD_FAILED) from e

        if not response.is_success:
            logger.error("Image upload failed with status %d", response.status_code)
            raise ImageUploadError(UPLOAD_FAILED)

        try:
            body = response.json()
            secure_url = body["secure_url"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("Image upload returned an unexpected body: %s", e)
            raise ImageUploadError(UPLOAD_FAILED) from e

        return UploadedImage(url=secure_url, delete_token=body.get("delete_token"))

    def delete(self, delete_token: str) -> None:
        """
        Delete a freshly uploaded image using its delete token.

        Raises:
            ImageUploadError: If the image host does not confirm the deletion
        """
        url = self._endpoint("delete_by_token")
        try:
            response = self._http.post(url, data={"token": delete_token})
        except httpx.RequestError as e:
            raise ImageUploadError(DELETE_FAILED) from e

        if not response.is_success:
            raise ImageUploadError(DELETE_FAILED)
