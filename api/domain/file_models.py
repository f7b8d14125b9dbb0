"""
Modelos Pydantic de dominio para el almacenamiento de imágenes.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from common.paths import DOWNLOAD_DIR, MAX_FORM_MEMORY, UPLOAD_DIR

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "svg"})


class FileInfo(BaseModel):
    name: str = Field(..., description="Nombre del archivo dentro del directorio de uploads")


class StorageSettings(BaseModel):
    """Directorios y límites que reciben los handlers (nunca globales ocultos)."""

    upload_dir: Path = Field(UPLOAD_DIR, description="Directorio de imágenes subidas")
    download_dir: Path = Field(DOWNLOAD_DIR, description="Directorio donde se copian las descargas")
    max_form_memory: int = Field(MAX_FORM_MEMORY, gt=0, description="Bytes máximos por parte del multipart")

    @classmethod
    def defaults(cls) -> "StorageSettings":
        return cls(upload_dir=UPLOAD_DIR, download_dir=DOWNLOAD_DIR, max_form_memory=MAX_FORM_MEMORY)
