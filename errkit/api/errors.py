from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from errkit.core.types import DEFAULT_ERR_CODE, DEFAULT_HTTP_CODE

if TYPE_CHECKING:
    from errkit.core.types import RequestAborter


@dataclasses.dataclass(frozen=True, slots=True)
class APIError:
    """Public error response: status code plus the ``{code, message}`` body."""

    response_code: int
    error_code: int
    message: str

    def to_payload(self) -> dict[str, Any]:
        # The response code is transmitted as the HTTP status, not in the body.
        return make_error_payload(code=self.error_code, message=self.message)

    def to_request(self, aborter: RequestAborter) -> None:
        """Write this error to a request and abort further processing."""

        aborter.abort(self.response_code, self)


def make_error_payload(*, code: int, message: str) -> dict[str, Any]:
    return {
        "code": code,
        "message": message,
    }


def api_error(http_code: int, err_code: int, message: str) -> APIError:
    return APIError(http_code, err_code, message)


def default_api_error(message: str) -> APIError:
    return APIError(DEFAULT_HTTP_CODE, DEFAULT_ERR_CODE, message)


def to_request(aborter: RequestAborter, err: BaseException | None) -> bool:
    """Write err to the request and return True, or return False for None."""

    if err is None:
        return False
    # Imported here: the core error module depends on this one.
    from errkit.core.compare import wrap_exception

    wrap_exception(err).to_request(aborter)
    return True
