"""
ResponseSink: respuesta mutable que escriben los handlers antes de
convertirse en una Response de Starlette.
- El primer write_header gana; los siguientes se ignoran.
- Los headers sólo se pueden cambiar antes de escribir el status.
- write() agrega al body (y fija 200 si todavía no había status).
"""

import logging

from starlette.responses import Response

logger = logging.getLogger(__name__)


class ResponseSink:
    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.status_code: int | None = None
        self._body = bytearray()

    @property
    def written(self) -> bool:
        return self.status_code is not None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def set_header(self, key: str, value: str) -> None:
        if self.written:
            logger.debug("header %s ignorado: status %s ya escrito", key, self.status_code)
            return
        self.headers[key] = value

    def write_header(self, status_code: int) -> None:
        if self.written:
            logger.warning("write_header superfluo: %s ignorado, ya se escribió %s", status_code, self.status_code)
            return
        self.status_code = status_code

    def write(self, data: bytes | str) -> None:
        if not self.written:
            self.write_header(200)
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._body.extend(data)

    def to_response(self) -> Response:
        return Response(content=self.body, status_code=self.status_code or 200, headers=self.headers)
