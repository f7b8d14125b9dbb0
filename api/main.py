"""
Punto de entrada de FastAPI: registra routers.
"""

import logging

import uvicorn
from fastapi import FastAPI

from api.domain.file_models import StorageSettings
from api.routes import images
from common.paths import HOST, LOG_LEVEL, PORT

logger = logging.getLogger(__name__)


def create_app(settings: StorageSettings | None = None) -> FastAPI:
    settings = settings or StorageSettings.defaults()
    app = FastAPI(title="Pictures API")

    @app.get("/")
    def root():
        return {"status": "ok", "service": "Pictures API (uploads locales)"}

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(images.build_router(settings))
    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("server is starting at port %d", PORT)
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)
