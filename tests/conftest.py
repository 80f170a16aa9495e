"""Shared pytest fixtures for rxvmgen tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from rxvmgen.config.settings import RxvmgenSettings
from rxvmgen.services.telemetry import _current_span, disable_telemetry

# The sample contracts shipped alongside the original ReactiveUI generator.
TEST_INTERFACES = """\
interface IColorPicker : IRoutableViewModel {
\tint Red { get; set; }
\tint Green { get; set; }
\tint Blue { get; set; }

\tColor FinalColor { get; }
}

interface ILoginDialog : IRoutableViewModel {
\t[Once]
\tIAppState AppState { get; }

\tstring User { get; set; }
\tstring Password { get; set; }
\tstring PasswordAgain { get; set; }

\tReactiveCommand Ok { get; }
}
"""

COLOR_PICKER_ONE_LINE = (
    "interface IColorPicker : IRoutableViewModel { int Red {get;set;} Color FinalColor {get;} }"
)

LOGIN_DIALOG_ONE_LINE = (
    "interface ILoginDialog : IRoutableViewModel "
    "{ [Once] IAppState AppState {get;} ReactiveCommand Ok {get;} }"
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate tests from the caller's config, logging and telemetry state."""
    for name in ("RXVMGEN_CONFIG", "RXVMGEN_FORMAT__ENABLED", "RXVMGEN_FORMAT__INDENT"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    rxv = logging.getLogger("rxvmgen")
    rxv_level = rxv.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    rxv.setLevel(rxv_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def test_interfaces() -> str:
    return TEST_INTERFACES


@pytest.fixture
def color_picker_source() -> str:
    return COLOR_PICKER_ONE_LINE


@pytest.fixture
def login_dialog_source() -> str:
    return LOGIN_DIALOG_ONE_LINE


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory with no rxvmgen.toml above it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def source_file(project_root: Path) -> Path:
    """TestInterface.cs holding both sample interfaces."""
    path = project_root / "TestInterface.cs"
    path.write_text(TEST_INTERFACES, encoding="utf-8")
    return path


@pytest.fixture
def settings(project_root: Path) -> RxvmgenSettings:
    """Default settings rooted at the temporary project directory."""
    return RxvmgenSettings.from_cli(project_root=project_root)
