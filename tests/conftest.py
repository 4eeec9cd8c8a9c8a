from __future__ import annotations

from pathlib import Path
import sys

import pytest


# Ensure `import errkit` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from errkit.api.errors import APIError  # noqa: E402


class LogCapture:
    """Log writer that keeps every formatted line."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, fmt: str, *args: object) -> None:
        self.lines.append(fmt % args if args else fmt)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class RecordingAborter:
    def __init__(self) -> None:
        self.calls: list[tuple[int, APIError]] = []

    def abort(self, status_code: int, payload: APIError) -> None:
        self.calls.append((status_code, payload))

    @property
    def last(self) -> tuple[int, APIError] | None:
        return self.calls[-1] if self.calls else None


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    # Settings come from the environment; never let the host leak in.
    monkeypatch.delenv("ERRKIT_PRINT_UNSAFE_ERRORS", raising=False)
    monkeypatch.delenv("ERRKIT_GENERIC_MESSAGE", raising=False)
    monkeypatch.delenv("ERRKIT_LOGGER_NAME", raising=False)

    from errkit.core.settings import get_settings, reset_output_config

    get_settings.cache_clear()
    reset_output_config()
    yield
    get_settings.cache_clear()
    reset_output_config()


@pytest.fixture()
def log_capture() -> LogCapture:
    from errkit.core.settings import configure

    capture = LogCapture()
    configure(write_log=capture)
    return capture


@pytest.fixture()
def aborter() -> RecordingAborter:
    return RecordingAborter()
