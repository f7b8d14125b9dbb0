"""
Helpers de filesystem para las imágenes: nombres hasheados, validación de
extensión, guardado y listado del directorio de uploads.
"""

import hashlib
import os
from pathlib import Path

from pydantic import TypeAdapter

from api.domain.file_models import IMAGE_EXTENSIONS, FileInfo

_file_list = TypeAdapter(list[FileInfo])


def split_file_name(filename: str) -> list[str]:
    return filename.split(".")


def validate_img(extension: str) -> bool:
    """Sólo jpg/jpeg/png/svg, comparación exacta (sensible a mayúsculas)."""
    return extension in IMAGE_EXTENSIONS


def hash_image_name(basename: str, extension: str) -> str:
    """sha256 del nombre base (no del contenido) + extensión original."""
    return hashlib.sha256(basename.encode("utf-8")).hexdigest() + "." + extension


def create_dir_and_save(data: bytes, directory: Path, name: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_bytes(data)
    return path


def remove_entry(path: Path) -> None:
    """Borra un archivo o un directorio vacío (las dos cosas aparecen en /list)."""
    if path.is_dir() and not path.is_symlink():
        path.rmdir()
    else:
        path.unlink()


def _entry_name(name: str) -> str:
    # nombres que no son UTF-8 válido: U+FFFD en vez de surrogates
    return os.fsencode(name).decode("utf-8", errors="replace")


def list_entries(directory: Path) -> list[FileInfo]:
    """Entradas directas del directorio (archivos y subdirectorios), ordenadas por nombre."""
    with os.scandir(directory) as entries:
        files = [FileInfo(name=_entry_name(entry.name)) for entry in entries]
    files.sort(key=lambda f: f.name)
    return files


def dump_file_list(files: list[FileInfo]) -> bytes:
    return _file_list.dump_json(files)