# api/routes/images.py
"""
IMAGES: subida, listado, descarga (copia server-side) y borrado de imágenes.
- ANY /upload              : multipart, campo 'image' (jpg/jpeg/png/svg)
- ANY /list                : JSON [{"name": ...}] ordenado ascendente
- ANY /download?name=<n>   : copia uploads/<n> a downloads/<n> (no devuelve bytes)
- ANY /delete?name=<n>     : borra uploads/<n>
"""

import logging

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from api.domain.file_models import StorageSettings
from api.errors import ErrorHandler, HTTPError
from api.response import ResponseSink
from api.services.storage import (
    create_dir_and_save,
    dump_file_list,
    hash_image_name,
    list_entries,
    remove_entry,
    split_file_name,
    validate_img,
)

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class ImageHandler:
    def __init__(self, settings: StorageSettings) -> None:
        self.settings = settings

    async def upload_file(self, w: ResponseSink, r: Request) -> HTTPError | None:
        """Hashea el nombre de la imagen y la guarda en el directorio de uploads."""
        if not r.headers.get("content-type", "").lower().startswith("multipart/form-data"):
            return HTTPError(400, "error parsing form")
        try:
            form = await r.form(max_part_size=self.settings.max_form_memory)
        except (MultiPartException, StarletteHTTPException):
            return HTTPError(400, "error parsing form")

        try:
            file = form.get("image")
            if not isinstance(file, UploadFile):
                return HTTPError(400, "error getting file")

            # "a.b.c" -> base "a", ext "b"; el resto se ignora
            split_name = split_file_name(file.filename or "")
            if len(split_name) < 2:
                return HTTPError(400, "error splitting file name")

            if not validate_img(split_name[1]):
                return HTTPError(400, "file is not image type")

            hash_name = hash_image_name(split_name[0], split_name[1])
            if await run_in_threadpool((self.settings.upload_dir / hash_name).exists):
                return HTTPError(400, "error image already exist")

            try:
                data = await file.read()
                await run_in_threadpool(create_dir_and_save, data, self.settings.upload_dir, hash_name)
            except OSError as e:
                return HTTPError(500, e).wrap("error making directory or saving file")
        finally:
            await form.close()

        logger.info("imagen guardada: %s -> %s", file.filename, hash_name)
        w.write_header(201)
        return None

    def list_files(self, w: ResponseSink, r: Request) -> HTTPError | None:
        """Lista todas las imágenes en orden ascendente."""
        w.set_header("Content-Type", "application/json")

        try:
            files = list_entries(self.settings.upload_dir)
        except OSError as e:
            return HTTPError(404, e)

        try:
            output = dump_file_list(files)
        except ValueError as e:
            return HTTPError(500, e)

        logger.info("%s", output.decode("utf-8"))
        w.write(output)
        return None

    def download_file(self, w: ResponseSink, r: Request) -> HTTPError | None:
        """Copia la imagen seleccionada por nombre al directorio de descargas."""
        image_name = r.query_params.get("name", "")
        file_path = self.settings.upload_dir / image_name
        download_path = self.settings.download_dir / image_name

        if not file_path.exists():
            return HTTPError(404, "error file path does not exist")

        try:
            src = open(file_path, "rb")
        except OSError:
            return HTTPError(500, "error file path")

        with src:
            if download_path.exists():
                return HTTPError(500, "error downloaded path")

            try:
                self.settings.download_dir.mkdir(parents=True, exist_ok=True)
            except OSError:
                return HTTPError(500, "error making directory")

            try:
                data = src.read()
            except OSError:
                return HTTPError(500, "error reading bytes")

            try:
                download_path.write_bytes(data)
            except OSError:
                return HTTPError(500, "error write file")

        logger.info("imagen copiada a %s", download_path)
        w.write_header(200)
        return None

    def delete_file(self, w: ResponseSink, r: Request) -> HTTPError | None:
        """Borra la imagen seleccionada por nombre."""
        file_path = self.settings.upload_dir / r.query_params.get("name", "")

        # El status se escribe acá; el del dispatcher se ignora (gana el primero)
        if not file_path.exists():
            w.write_header(404)
            return HTTPError(404, "error file not found")

        try:
            remove_entry(file_path)
        except OSError:
            w.write_header(500)
            return HTTPError(500, "error failed to remove file")

        logger.info("imagen borrada: %s", file_path)
        w.write_header(204)
        return None


def build_router(settings: StorageSettings) -> APIRouter:
    router = APIRouter(tags=["images"])
    images = ImageHandler(settings)
    handle = ErrorHandler().wrap

    router.add_api_route("/upload", handle(images.upload_file), methods=ALL_METHODS)
    router.add_api_route("/list", handle(images.list_files), methods=ALL_METHODS)
    router.add_api_route("/download", handle(images.download_file), methods=ALL_METHODS)
    router.add_api_route("/delete", handle(images.delete_file), methods=ALL_METHODS)
    return router
