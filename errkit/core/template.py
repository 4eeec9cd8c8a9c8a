from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from errkit.core.error import Error
from errkit.core.formatting import interpolate
from errkit.core.trace import capture_stack, generate_id
from errkit.core.types import (
    GENERIC_ERROR_TYPE,
    APIData,
    Content,
    ErrorType,
    Flags,
    Trace,
)


@dataclasses.dataclass(frozen=True, slots=True, eq=False)
class Template:
    """Reusable error prototype, declared once and instantiated with make().

    All builder methods return a new Template. A template never carries an
    id or a stack trace; those are captured by make() at the failure site.
    Like Error, ``==`` is identity; compare error types with are_equal().
    """

    error_type: ErrorType
    content: Content = Content()
    flags: Flags = Flags()
    api_data: APIData = APIData()

    @classmethod
    def new(cls, error_type: str) -> Template:
        return cls(ErrorType(error_type))

    def get_type(self) -> ErrorType:
        return self.error_type

    @property
    def message(self) -> str:
        return self.content.message

    @property
    def tags(self) -> Mapping[str, Any]:
        return self.flags.tag_map()

    def _with_flags(self, **changes: Any) -> Template:
        return dataclasses.replace(self, flags=dataclasses.replace(self.flags, **changes))

    def _with_api(self, **changes: Any) -> Template:
        return dataclasses.replace(
            self, api_data=dataclasses.replace(self.api_data, **changes)
        )

    def msg(self, fmt: str, *args: Any) -> Template:
        """Set the message. Without args the format is kept for a later fill()."""

        content = dataclasses.replace(self.content, message=interpolate(fmt, args))
        return dataclasses.replace(self, content=content)

    def fill(self, *args: Any) -> Template:
        content = dataclasses.replace(
            self.content, message=interpolate(self.content.message, args)
        )
        return dataclasses.replace(self, content=content)

    def track(self) -> Template:
        return self._with_flags(track=True)

    def untrack(self) -> Template:
        return self._with_flags(track=False, trace=False)

    def trace(self) -> Template:
        return self._with_flags(track=True, trace=True)

    def no_trace(self) -> Template:
        return self._with_flags(trace=False)

    def safe(self) -> Template:
        return self._with_flags(is_safe=True)

    def tag(self, name: str, value: Any) -> Template:
        return dataclasses.replace(self, flags=self.flags.with_tag(name, value))

    def http_code(self, code: int) -> Template:
        return self._with_api(http_code=code)

    def err_code(self, code: int) -> Template:
        return self._with_api(err_code=code)

    def api(self, http_code: int, err_code: int) -> Template:
        """Shorthand for expected, user-facing errors: safe and untracked."""

        return self.http_code(http_code).err_code(err_code).safe().untrack()

    def make(self) -> Error:
        """Instantiate an Error, capturing id and stack trace at the caller."""
        return self._instantiate(self.flags, skip=1)

    def make_traced(self, skip: int = 0) -> Error:
        """Instantiate a tracked and traced Error.

        ``skip`` drops that many additional frames from the captured stack,
        for helper functions that call make_traced on behalf of their caller.
        """

        flags = dataclasses.replace(self.flags, track=True, trace=True)
        return self._instantiate(flags, skip=skip + 1)

    def _instantiate(self, flags: Flags, *, skip: int) -> Error:
        err_id = ""
        stack = ""
        if flags.track:
            err_id = generate_id(self.error_type, self.content.message)
        if flags.trace:
            stack = capture_stack(skip + 1)
        return Error(
            self.error_type,
            self.content,
            flags,
            self.api_data,
            Trace(id=err_id, stack_trace=stack),
        )


def new(error_type: str) -> Template:
    """Declare a template; until msg() is called it renders as its type."""
    return Template.new(error_type)


GENERIC_ERROR = new(GENERIC_ERROR_TYPE).msg("A generic error occured").trace()
CONFIGURATION_ERROR = new("ConfigurationError").msg(
    "The specified configuration is not valid"
)
ARGUMENT_ERROR = new("ArgumentError").msg("An invalid argument has been supplied")
