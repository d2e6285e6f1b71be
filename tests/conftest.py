"""
Shared fixtures for the tailsieve tests.
"""

import io

import pytest

from tailsieve import paths
from tailsieve.output import Output


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config folder at a temp dir so the user's config never leaks in."""
    cfg_dir = tmp_path / "config"
    monkeypatch.setattr(paths, "config_dir", lambda: cfg_dir)
    return cfg_dir


@pytest.fixture
def numbered_file(tmp_path):
    """Factory: a file with `count` lines named line1..lineN."""

    def _make(count, name="numbered.log", trailing_newline=True):
        p = tmp_path / name
        text = "\n".join(f"line{i}" for i in range(1, count + 1))
        if trailing_newline and count:
            text += "\n"
        p.write_bytes(text.encode("utf-8"))
        return p

    return _make


@pytest.fixture
def plain_output():
    """Output writing to a StringIO, colors off."""
    buf = io.StringIO()
    return Output(stream=buf, color=False), buf


@pytest.fixture
def color_output():
    """Output writing to a StringIO with ANSI colors forced on."""
    buf = io.StringIO()
    return Output(stream=buf, highlight_style="red", color=True), buf


@pytest.fixture
def append():
    """Append text to a file the way a logging process would."""

    def _append(path, text):
        with open(path, "ab") as f:
            f.write(text.encode("utf-8"))

    return _append
