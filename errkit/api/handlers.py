from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from errkit.api.errors import APIError
from errkit.core.compare import wrap_exception
from errkit.core.error import Error


@dataclasses.dataclass(slots=True)
class AbortRequest(Exception):
    """Raised by HTTPAborter; turned into a JSON response by the handlers."""

    status_code: int
    payload: APIError


class HTTPAborter:
    """RequestAborter for FastAPI routes.

    Aborting raises AbortRequest, which the handlers installed by
    install_error_handlers() render as the error response.
    """

    def abort(self, status_code: int, payload: APIError) -> None:
        raise AbortRequest(status_code=status_code, payload=payload)


def _json_response(api_error: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=api_error.response_code,
        content=api_error.to_payload(),
    )


def install_error_handlers(app: FastAPI, *, exclude: Iterable[object] = ()) -> None:
    """Register handlers mapping errors to the ``{code, message}`` envelope.

    Errors whose type matches one in ``exclude`` are answered but not logged.
    """

    excluded = tuple(exclude)

    @app.exception_handler(AbortRequest)
    async def _abort_handler(request: Request, exc: AbortRequest):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.to_payload(),
        )

    @app.exception_handler(Error)
    async def _error_handler(request: Request, exc: Error):
        exc.to_log(*excluded)
        return _json_response(exc.api())

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception):
        # Tracked so the redacted response carries an id that can be found
        # in the log next to the traceback of the failure.
        method = getattr(request, "method", None)
        path = getattr(getattr(request, "url", None), "path", None)
        err = wrap_exception(exc).track()
        if isinstance(method, str) and isinstance(path, str) and method and path:
            err = err.tag("method", method).tag("path", path)
        err.to_log(*excluded)
        return _json_response(err.api())
