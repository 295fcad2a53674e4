from __future__ import annotations

import os
import shutil
from pathlib import Path


DEFAULT_SUBDIRS = [
    "uploads",
    "exports",
]


def _base_root() -> Path:
    env_root = os.getenv("ROLPAGOS_DATA_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "data"


def ensure_data_root() -> Path:
    """Ensure the data folders exist and return the root path."""

    root = _base_root()
    for sub in DEFAULT_SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)
    return root


def save_upload(filename: str, source) -> Path:
    """Persist an uploaded roster under the uploads directory."""

    safe_name = Path(filename).name
    target = ensure_data_root() / "uploads" / safe_name
    with target.open("wb") as buffer:
        shutil.copyfileobj(source, buffer)
    return target


def export_path(filename: str) -> Path:
    return ensure_data_root() / "exports" / Path(filename).name
