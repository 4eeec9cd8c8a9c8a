from __future__ import annotations

import dataclasses
import logging
from functools import lru_cache
from typing import Any, Callable

from pydantic_settings import BaseSettings, SettingsConfigDict


LogWriter = Callable[..., Any]


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ERRKIT_",
        case_sensitive=False,
    )

    # Debug/test only: disclose technical messages in API responses.
    print_unsafe_errors: bool = False
    generic_message: str = "An error occured"
    logger_name: str = "errkit"


@lru_cache
def get_settings() -> Settings:
    return Settings()


@dataclasses.dataclass(frozen=True, slots=True)
class OutputConfig:
    """Everything the output adapters need, passed as one immutable value."""

    print_unsafe_errors: bool
    generic_message: str
    write_log: LogWriter


_output_config: OutputConfig | None = None


def _default_config() -> OutputConfig:
    settings = get_settings()
    return OutputConfig(
        print_unsafe_errors=settings.print_unsafe_errors,
        generic_message=settings.generic_message,
        write_log=logging.getLogger(settings.logger_name).error,
    )


def get_output_config() -> OutputConfig:
    """Return the process-wide output config, building it from settings lazily."""

    global _output_config
    config = _output_config
    if config is None:
        config = _default_config()
        _output_config = config
    return config


def configure(
    *,
    print_unsafe_errors: bool | None = None,
    generic_message: str | None = None,
    write_log: LogWriter | None = None,
) -> OutputConfig:
    """Replace fields of the process-wide output config.

    Intended for application startup and tests. The new config is published
    with a single assignment, so concurrent readers see either the old or
    the new value, never a mix.
    """

    global _output_config
    changes: dict[str, Any] = {}
    if print_unsafe_errors is not None:
        changes["print_unsafe_errors"] = print_unsafe_errors
    if generic_message is not None:
        changes["generic_message"] = generic_message
    if write_log is not None:
        changes["write_log"] = write_log
    config = dataclasses.replace(get_output_config(), **changes)
    _output_config = config
    return config


def reset_output_config() -> None:
    global _output_config
    _output_config = None
