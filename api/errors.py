"""
Errores HTTP tipados y el dispatcher que los traduce a respuestas.
- Los handlers devuelven HTTPError (o None) en vez de lanzar excepciones.
- ErrorHandler.wrap adapta un handler a un endpoint de FastAPI/Starlette.
- Errores 5xx: el cliente recibe body vacío, el detalle sólo va al log.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Union

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from api.response import ResponseSink

logger = logging.getLogger(__name__)

HandlerResult = Union["HTTPError", None]
Handler = Callable[[ResponseSink, Request], Union[HandlerResult, Awaitable[HandlerResult]]]


class HTTPError(Exception):
    def __init__(self, code: int, internal: Any) -> None:
        super().__init__(code, internal)
        self.code = code
        self.internal = internal
        self.context = ""
        self.public_msg = ""

    def __str__(self) -> str:
        if self.context:
            return f"HTTP {self.code}: {self.context}: {self.internal}"
        return f"HTTP {self.code}: {self.internal}"

    def wrap(self, context: str) -> "HTTPError":
        """Agrega una etiqueta de contexto (prefija el mensaje logueado)."""
        self.context = context
        return self

    def public_error_msg(self, msg: str) -> "HTTPError":
        """Mensaje que ve el cliente en errores < 500 (reemplaza al interno)."""
        self.public_msg = msg
        return self

    def public_error(self) -> str:
        return self.public_msg or str(self)


class ErrorHandler:
    """Adapta handlers `(sink, request) -> HTTPError | None` a endpoints."""

    def write_error(self, w: ResponseSink, err: HTTPError) -> None:
        logger.error("Error: %s", err)

        error_msg = ""
        if err.code < 500:
            error_msg = err.public_error()

        w.set_header("Content-Type", "text/plain; charset=utf-8")
        w.set_header("X-Content-Type-Options", "nosniff")
        w.write_header(err.code)
        w.write(error_msg)

    async def dispatch(self, handler: Handler, request: Request) -> ResponseSink:
        w = ResponseSink()
        if inspect.iscoroutinefunction(handler):
            err = await handler(w, request)
        else:
            err = await run_in_threadpool(handler, w, request)

        if err is not None:
            self.write_error(w, err)
        return w

    def wrap(self, handler: Handler) -> Callable[[Request], Awaitable[Response]]:
        async def endpoint(request: Request) -> Response:
            w = await self.dispatch(handler, request)
            return w.to_response()

        endpoint.__name__ = getattr(handler, "__name__", "endpoint")
        endpoint.__doc__ = handler.__doc__
        return endpoint
