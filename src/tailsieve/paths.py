from __future__ import annotations
from pathlib import Path


def config_dir() -> Path:
    """User config folder (Linux standard)."""
    return Path.home() / ".config" / "tailsieve"


def config_file() -> Path:
    return config_dir() / "config.yaml"
