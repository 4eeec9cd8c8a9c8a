from __future__ import annotations

from errkit.core.error import Error
from errkit.core.trace import capture_stack, format_traceback, generate_id
from errkit.core.types import APIData, Content, Flags, Trace, TypedError, error_type_of


def wrap(err: BaseException | None) -> Error | None:
    """Lift any exception into an Error. Returns None for None.

    Errors are returned unchanged, so wrapping is idempotent.
    """

    return _wrap(err, with_type=False, skip=1)


def wrap_t(err: BaseException | None) -> Error | None:
    """Like wrap, but prefixes the message with the derived error type."""

    return _wrap(err, with_type=True, skip=1)


def wrap_exception(err: BaseException) -> Error:
    return _lift(err, with_type=False, skip=1)


def _wrap(err: BaseException | None, *, with_type: bool, skip: int) -> Error | None:
    if err is None:
        return None
    return _lift(err, with_type=with_type, skip=skip + 1)


def _lift(err: BaseException, *, with_type: bool, skip: int) -> Error:
    if isinstance(err, Error):
        return err

    error_type = error_type_of(err)
    message = str(err)
    if with_type:
        message = f"[{error_type}] {message}" if message else str(error_type)

    # A raised exception already knows where it failed; keep that location.
    stack = format_traceback(err) or capture_stack(skip + 1)
    trace = Trace(id=generate_id(error_type, message), stack_trace=stack)
    return Error(
        error_type,
        Content(message=message),
        Flags(track=False, trace=True),
        APIData(),
        trace,
        origin=err,
    )


def are_equal(a: object, b: object) -> bool:
    """True if both are None, or both resolve to the same error type."""

    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return error_type_of(a) == error_type_of(b)


def instance_of(err: object, template: TypedError) -> bool:
    if err is None:
        return False
    return error_type_of(err) == template.get_type()
