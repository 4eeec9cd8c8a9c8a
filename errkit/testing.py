"""pytest helpers for asserting on errkit errors.

    from errkit.testing import assert_error

    def test_lookup():
        assert_error(NOT_FOUND, lookup("missing"))
"""

from __future__ import annotations

import pytest

from errkit.core.compare import are_equal, instance_of
from errkit.core.template import Template
from errkit.core.types import error_type_of


def _describe(actual: BaseException | None) -> str:
    return "<None>" if actual is None else str(actual)


def assert_error(
    expected: Template | BaseException, actual: BaseException | None, msg: str = ""
) -> None:
    """Fail unless actual has the error type of expected.

    ``expected`` may be a Template or any exception; the message of either
    side is irrelevant.
    """

    if isinstance(expected, Template):
        if not instance_of(actual, expected):
            pytest.fail(
                f"Expected error of type {str(expected.get_type())!r}, "
                f"but got {_describe(actual)!r} instead {msg}".rstrip()
            )
        return

    if isinstance(expected, BaseException):
        if not are_equal(actual, expected):
            expected_type = error_type_of(expected)
            pytest.fail(
                f"Expected error of type {str(expected_type)!r}, "
                f"but got {_describe(actual)!r} instead {msg}".rstrip()
            )
        return

    raise TypeError(
        "assert_error requires an expected exception or Template, "
        f"but got {type(expected).__name__!r} instead"
    )


def assert_no_error(actual: BaseException | None, msg: str = "") -> None:
    if actual is None:
        return
    pytest.fail(f"Expected no error, but got {str(actual)!r} instead {msg}".rstrip())
