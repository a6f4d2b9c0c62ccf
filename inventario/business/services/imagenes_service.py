import asyncio
import logging
import shutil
import uuid
from pathlib import Path
from typing import Union

from ..common.errors import ImageStorageError, ValidationError

logger = logging.getLogger(__name__)


class ImageService:
    """
    Stores product images under an app-owned directory.

    Products only keep the generated filename, never the path the user
    picked the image from.
    """

    DEFAULT_EXTENSION = ".jpg"

    def __init__(self, images_dir: Union[str, Path]):
        self.images_dir = Path(images_dir)

    async def init_image_directory(self) -> None:
        try:
            await asyncio.to_thread(self.images_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise ImageStorageError("No se pudo crear el directorio de imágenes") from e

    def get_image_path(self, file_name: str) -> Path:
        if not file_name or Path(file_name).name != file_name or file_name in (".", ".."):
            raise ValidationError("Nombre de archivo de imagen inválido")
        return self.images_dir / file_name

    async def save_image(self, source_path: Union[str, Path]) -> str:
        source = Path(source_path)
        if not source.is_file():
            raise ImageStorageError("La imagen seleccionada no existe")
        await self.init_image_directory()

        extension = source.suffix.lower() or self.DEFAULT_EXTENSION
        file_name = f"{uuid.uuid4()}{extension}"
        try:
            await asyncio.to_thread(shutil.copyfile, source, self.images_dir / file_name)
        except OSError as e:
            raise ImageStorageError() from e
        logger.info(f"Image stored as {file_name}")
        return file_name  # Solo el nombre, no la ruta completa

    async def delete_image(self, file_name: str) -> bool:
        """Delete if it exists. A missing file counts as deleted; errors are only logged."""
        if not file_name:
            return True
        try:
            path = self.get_image_path(file_name)
            await asyncio.to_thread(path.unlink, missing_ok=True)
            return True
        except (OSError, ValidationError) as e:
            logger.error(f"Error deleting image {file_name}: {e}")
            return False

    async def image_exists(self, file_name: str) -> bool:
        if not file_name:
            return False
        path = self.get_image_path(file_name)
        return await asyncio.to_thread(path.is_file)
