"""Progress photo upload page and gallery."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from fittrack.api.images import ImageUploader, ImageUploadError
from fittrack.api.services import PhotoService
from fittrack.pages.base import FormMessage, FormPage, ValidationError
from fittrack.tracking.models import ProgressPhoto

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 5 * 1024 * 1024
GALLERY_SIZE = 10


@dataclass
class PhotoForm:
    date: date = field(default_factory=date.today)
    description: str = ""


@dataclass(frozen=True)
class SelectedFile:
    path: Path
    size: int
    content_type: str


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or "application/octet-stream"


class PhotosPage(FormPage):
    """Upload a progress photo and list the most recent ones."""

    success_text = "Foto de progreso guardada correctamente"
    failure_text = "Error al guardar foto"

    def __init__(self, service: PhotoService, uploader: ImageUploader):
        super().__init__()
        self.service = service
        self.uploader = uploader
        self.form = PhotoForm()
        self.selected: Optional[SelectedFile] = None
        self.photos: list[ProgressPhoto] = []

    def select_file(self, path: Path) -> bool:
        """
        Pick the image to upload.

        Oversized files are rejected first, then non-image types. A rejected
        file leaves any previous selection untouched.

        Returns:
            True if the file was accepted
        """
        size = path.stat().st_size
        content_type = guess_content_type(path)

        if size > MAX_FILE_BYTES:
            self.message = FormMessage.error("El archivo es demasiado grande. Máximo 5MB.")
            return False
        if not content_type.startswith("image/"):
            self.message = FormMessage.error("Solo se permiten archivos de imagen.")
            return False

        self.selected = SelectedFile(path=path, size=size, content_type=content_type)
        self.message = None
        return True

    def clear_selection(self) -> None:
        self.selected = None

    def validate(self) -> None:
        if self.selected is None:
            raise ValidationError("Debes seleccionar una imagen")

    def submit(self) -> FormMessage:
        """Upload the selected file, then save its metadata."""
        selected = self.selected
        if not self._check() or selected is None:
            return self.message  # type: ignore[return-value]

        with self._submitting():
            try:
                response = self.service.save_with_upload(
                    self.uploader,
                    day=self.form.date,
                    content=selected.path.read_bytes(),
                    filename=selected.path.name,
                    content_type=selected.content_type,
                    description=self.form.description.strip() or None,
                )
            except (ImageUploadError, OSError) as e:
                logger.error("Photo upload failed: %s", e)
                self.message = FormMessage.error("Error al subir imagen")
                return self.message
            message = self._finish(response)

        if response.success:
            self.load_photos()
        return message

    def on_success(self) -> None:
        self.form = PhotoForm()
        self.clear_selection()

    def load_photos(self, limit: int = GALLERY_SIZE) -> list[ProgressPhoto]:
        """Refresh the gallery. A failed load keeps the previous photos."""
        response = self.service.get_recent(limit)
        if response.success and response.data is not None:
            self.photos = response.data
        else:
            logger.error("Error al cargar fotos: %s", response.error_message)
        return self.photos
