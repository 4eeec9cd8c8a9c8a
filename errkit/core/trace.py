from __future__ import annotations

import hashlib
import inspect
import time
import traceback
import uuid


STACK_HEADER = "Stack (most recent call last):\n"


def generate_id(error_type: str, message: str) -> str:
    """Return a short random hex id for one error occurrence."""

    seed = f"{error_type}|{message}|{time.time_ns()}|{uuid.uuid4().hex}"
    return hashlib.sha1(seed.encode("utf-8")).hexdigest()[:16]


def capture_stack(skip: int = 0) -> str:
    """Format the current call stack, most recent call last.

    The frame of the function calling capture_stack is the newest frame
    included; ``skip`` drops that many further frames so that helpers can
    report their caller's location instead of their own.
    """

    frame = inspect.currentframe()
    try:
        # Never include capture_stack itself.
        target = frame.f_back if frame is not None else None
        for _ in range(skip):
            if target is None:
                break
            target = target.f_back
        if target is None:
            return ""
        return STACK_HEADER + "".join(traceback.format_stack(target))
    finally:
        # Break the frame reference cycle.
        del frame


def format_traceback(exc: BaseException) -> str:
    """Format the traceback of a raised exception, or "" if it was never raised."""

    if exc.__traceback__ is None:
        return ""
    return "".join(traceback.format_exception(exc))
