"""Application version helper.

Use importlib.metadata when installed, and fall back to reading pyproject.toml
when running from a source checkout.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _dist_version
from pathlib import Path

import tomllib

# src/teachmate/app_version.py -> repo root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_app_version(package_name: str = "teachmate") -> str:
    try:
        return _dist_version(package_name)
    except PackageNotFoundError:
        try:
            with _PYPROJECT.open("rb") as f:
                data = tomllib.load(f)
            return str(data.get("project", {}).get("version", "0.0.0"))
        except (OSError, tomllib.TOMLDecodeError):
            return "0.0.0"
