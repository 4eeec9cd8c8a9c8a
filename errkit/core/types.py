from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from errkit.api.errors import APIError
    from errkit.core.error import Error


DEFAULT_HTTP_CODE = 500
DEFAULT_ERR_CODE = 0


class ErrorType(str):
    """Identity of an error, independent of its message."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"ErrorType({str.__repr__(self)})"


GENERIC_ERROR_TYPE = ErrorType("GenericError")


@runtime_checkable
class TypedError(Protocol):
    """Anything that declares an ErrorType: templates and errors."""

    def get_type(self) -> ErrorType: ...


@runtime_checkable
class RequestAborter(Protocol):
    """Writes an error response and stops request processing."""

    def abort(self, status_code: int, payload: APIError) -> None: ...


@dataclasses.dataclass(frozen=True, slots=True)
class Content:
    message: str = ""
    cause: Error | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class Flags:
    track: bool = True
    trace: bool = False
    is_safe: bool = False
    # Stored as pairs so the record cannot be mutated through the mapping.
    tags: tuple[tuple[str, Any], ...] = ()

    def tag_map(self) -> Mapping[str, Any]:
        return MappingProxyType(dict(self.tags))

    def with_tag(self, name: str, value: Any) -> Flags:
        tags = tuple((k, v) for k, v in self.tags if k != name) + ((name, value),)
        return dataclasses.replace(self, tags=tags)


@dataclasses.dataclass(frozen=True, slots=True)
class APIData:
    http_code: int = DEFAULT_HTTP_CODE
    err_code: int = DEFAULT_ERR_CODE


@dataclasses.dataclass(frozen=True, slots=True)
class Trace:
    id: str = ""
    stack_trace: str = ""


def error_type_of(value: object) -> ErrorType:
    """Resolve the ErrorType of a template, an Error or a foreign exception.

    Foreign exceptions are identified by their class: builtins by bare name
    (``ValueError``), everything else by ``module.QualName``.
    """

    if isinstance(value, TypedError):
        return value.get_type()
    cls = type(value)
    if cls.__module__ == "builtins":
        return ErrorType(cls.__qualname__)
    return ErrorType(f"{cls.__module__}.{cls.__qualname__}")
