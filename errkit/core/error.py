from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Mapping

from errkit.api.errors import APIError
from errkit.core.formatting import interpolate
from errkit.core.settings import OutputConfig, get_output_config
from errkit.core.types import (
    GENERIC_ERROR_TYPE,
    APIData,
    Content,
    ErrorType,
    Flags,
    Trace,
    error_type_of,
)

if TYPE_CHECKING:
    from errkit.core.template import Template
    from errkit.core.types import RequestAborter


class Error(Exception):
    """One materialized error occurrence.

    Errors are immutable: every builder method returns a new Error and
    carries the id and stack trace of the receiver forward unchanged.
    Instances are created by ``Template.make()``, by ``wrap()`` or by the
    builder methods themselves, never directly by application code.
    """

    __slots__ = ("_type", "_content", "_flags", "_api", "_trace", "_origin")

    def __init__(
        self,
        error_type: ErrorType,
        content: Content,
        flags: Flags,
        api_data: APIData,
        trace: Trace,
        origin: BaseException | None = None,
    ) -> None:
        Exception.__init__(self)
        self._type = error_type
        self._content = content
        self._flags = flags
        self._api = api_data
        self._trace = trace
        self._origin = origin
        # Native tracebacks follow the cause chain, down to a wrapped exception.
        if content.cause is not None:
            self.__cause__ = content.cause
        elif origin is not None:
            self.__cause__ = origin

    def _replace(
        self,
        *,
        content: Content | None = None,
        flags: Flags | None = None,
        api_data: APIData | None = None,
    ) -> Error:
        return Error(
            self._type,
            self._content if content is None else content,
            self._flags if flags is None else flags,
            self._api if api_data is None else api_data,
            self._trace,
            origin=self._origin,
        )

    def __reduce__(self):
        # BaseException would rebuild from the empty args tuple.
        fields = (self._type, self._content, self._flags, self._api, self._trace)
        return (Error, fields + (self._origin,))

    # -- accessors ---------------------------------------------------------

    def get_type(self) -> ErrorType:
        return self._type

    def get_id(self) -> str:
        return self._trace.id

    def get_stack_trace(self) -> str:
        return self._trace.stack_trace

    def get_http_code(self) -> int:
        return self._api.http_code

    def get_err_code(self) -> int:
        return self._api.err_code

    @property
    def message(self) -> str:
        return self._content.message

    @property
    def cause_error(self) -> Error | None:
        return self._content.cause

    @property
    def origin(self) -> BaseException | None:
        """The foreign exception this error was wrapped from, if any."""
        return self._origin

    @property
    def is_safe(self) -> bool:
        return self._flags.is_safe

    @property
    def is_tracked(self) -> bool:
        return self._flags.track

    @property
    def is_traced(self) -> bool:
        return self._flags.trace

    @property
    def tags(self) -> Mapping[str, Any]:
        return self._flags.tag_map()

    # -- builders ----------------------------------------------------------

    def msg(self, fmt: str, *args: Any) -> Error:
        """Replace the message. The new message is unsafe until marked safe again."""

        content = dataclasses.replace(self._content, message=interpolate(fmt, args))
        flags = dataclasses.replace(self._flags, is_safe=False)
        return self._replace(content=content, flags=flags)

    def fill(self, *args: Any) -> Error:
        """Fill the placeholders of the current message; safeness is kept."""

        content = dataclasses.replace(
            self._content, message=interpolate(self._content.message, args)
        )
        return self._replace(content=content)

    def cause(self, err: BaseException | None) -> Error:
        """Attach err as cause; None removes the current cause."""

        from errkit.core.compare import _wrap

        content = dataclasses.replace(
            self._content, cause=_wrap(err, with_type=False, skip=1)
        )
        return self._replace(content=content)

    def str_cause(self, fmt: str, *args: Any) -> Error:
        cause = Error(
            GENERIC_ERROR_TYPE,
            Content(message=interpolate(fmt, args)),
            Flags(track=False, trace=False),
            APIData(),
            Trace(),
        )
        return self._replace(content=dataclasses.replace(self._content, cause=cause))

    def expand(self, fmt: str, *args: Any) -> Error:
        """Return an error with a new top message and this error as its cause."""
        return self._expand(interpolate(fmt, args), safe=False)

    def expand_safe(self, fmt: str, *args: Any) -> Error:
        """Like expand, but the new top message is marked safe."""
        return self._expand(interpolate(fmt, args), safe=True)

    def _expand(self, message: str, *, safe: bool) -> Error:
        return Error(
            self._type,
            Content(message=message, cause=self),
            dataclasses.replace(self._flags, is_safe=safe),
            self._api,
            self._trace,
        )

    def safe(self) -> Error:
        return self._replace(flags=dataclasses.replace(self._flags, is_safe=True))

    def track(self) -> Error:
        """Enable logging. Keeps the id captured at materialization, if any."""
        return self._replace(flags=dataclasses.replace(self._flags, track=True))

    def untrack(self) -> Error:
        flags = dataclasses.replace(self._flags, track=False, trace=False)
        return self._replace(flags=flags)

    def no_trace(self) -> Error:
        return self._replace(flags=dataclasses.replace(self._flags, trace=False))

    def tag(self, name: str, value: Any) -> Error:
        return self._replace(flags=self._flags.with_tag(name, value))

    def http_code(self, code: int) -> Error:
        return self._replace(api_data=dataclasses.replace(self._api, http_code=code))

    def err_code(self, code: int) -> Error:
        return self._replace(api_data=dataclasses.replace(self._api, err_code=code))

    # -- comparison --------------------------------------------------------

    def equals(self, other: object) -> bool:
        """True if other has the same ErrorType, whatever its message."""

        if other is None:
            return False
        return self._type == error_type_of(other)

    def is_a(self, template: Template) -> bool:
        return template is not None and self._type == template.get_type()

    # -- rendering ---------------------------------------------------------

    def __str__(self) -> str:
        return self._render(safe=False)

    def __repr__(self) -> str:
        return f"Error(type={str(self._type)!r}, id={self._trace.id!r}, message={str(self)!r})"

    def safe_string(self) -> str:
        """Render only the parts of the chain that are marked safe."""
        return self._render(safe=True)

    def _render(self, *, safe: bool) -> str:
        if safe and not self._flags.is_safe:
            return ""
        text = self._content.message or str(self._type)
        cause = self._content.cause
        if cause is not None:
            suffix = cause._render(safe=safe)
            if suffix:
                text = f"{text}: {suffix}"
        return text

    # -- output ------------------------------------------------------------

    def api(self, config: OutputConfig | None = None) -> APIError:
        """Build the public response object for this error.

        Technical text is only disclosed when the error is marked safe or
        the process-wide override is enabled; otherwise the generic
        placeholder is used. Tracked errors append their id so that the
        response can be matched with the log entry.
        """

        config = config or get_output_config()
        suffix = ""
        if self._flags.track and self._trace.id:
            suffix = f" [ID {self._trace.id}]"

        if config.print_unsafe_errors:
            message = str(self)
        elif self._flags.is_safe:
            message = self.safe_string()
        else:
            message = config.generic_message
        return APIError(self._api.http_code, self._api.err_code, message + suffix)

    def to_log(self, *exclude: object, config: OutputConfig | None = None) -> None:
        """Log id, message and stack trace, unless untracked or excluded."""

        if not self._flags.track:
            return
        self._emit(exclude, config)

    def force_log(self, *exclude: object, config: OutputConfig | None = None) -> None:
        """Like to_log, but also logs untracked errors."""
        self._emit(exclude, config)

    def _emit(self, exclude: tuple[object, ...], config: OutputConfig | None) -> None:
        for other in exclude:
            if other is not None and error_type_of(other) == self._type:
                return

        write = (config or get_output_config()).write_log
        err_id = self._trace.id
        if err_id:
            write("[ERR %s] %s%s", err_id, str(self), self._format_tags())
        if self._flags.trace and self._trace.stack_trace:
            write("[STACK %s] %s", err_id, self._trace.stack_trace)

    def _format_tags(self) -> str:
        if not self._flags.tags:
            return ""
        pairs = " ".join(f"{k}={v}" for k, v in self._flags.tags)
        return f" ({pairs})"

    def to_request(
        self, aborter: RequestAborter, config: OutputConfig | None = None
    ) -> None:
        self.api(config).to_request(aborter)

    def to_request_and_log(
        self,
        aborter: RequestAborter,
        *exclude: object,
        config: OutputConfig | None = None,
    ) -> None:
        self.to_log(*exclude, config=config)
        self.to_request(aborter, config)

    def to_request_and_force_log(
        self,
        aborter: RequestAborter,
        *exclude: object,
        config: OutputConfig | None = None,
    ) -> None:
        self.force_log(*exclude, config=config)
        self.to_request(aborter, config)
