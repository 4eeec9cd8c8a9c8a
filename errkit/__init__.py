"""Typed, immutable error values with safe API rendering and traceable logs.

Declare templates once, instantiate them where a failure happens:

    NOT_FOUND = errkit.new("NotFound").msg("Item {} not found").api(404, 1)

    err = NOT_FOUND.make().fill(item_id)
    err.to_request_and_log(aborter)
"""

from __future__ import annotations

from errkit.api.errors import (
    APIError,
    api_error,
    default_api_error,
    make_error_payload,
    to_request,
)
from errkit.core.compare import are_equal, instance_of, wrap, wrap_exception, wrap_t
from errkit.core.error import Error
from errkit.core.settings import (
    OutputConfig,
    Settings,
    configure,
    get_output_config,
    get_settings,
    reset_output_config,
)
from errkit.core.template import (
    ARGUMENT_ERROR,
    CONFIGURATION_ERROR,
    GENERIC_ERROR,
    Template,
    new,
)
from errkit.core.types import (
    DEFAULT_ERR_CODE,
    DEFAULT_HTTP_CODE,
    ErrorType,
    RequestAborter,
    TypedError,
    error_type_of,
)

__all__ = [
    "ARGUMENT_ERROR",
    "CONFIGURATION_ERROR",
    "DEFAULT_ERR_CODE",
    "DEFAULT_HTTP_CODE",
    "GENERIC_ERROR",
    "APIError",
    "Error",
    "ErrorType",
    "OutputConfig",
    "RequestAborter",
    "Settings",
    "Template",
    "TypedError",
    "api_error",
    "are_equal",
    "configure",
    "default_api_error",
    "error_type_of",
    "get_output_config",
    "get_settings",
    "instance_of",
    "make_error_payload",
    "new",
    "reset_output_config",
    "to_request",
    "wrap",
    "wrap_exception",
    "wrap_t",
]
