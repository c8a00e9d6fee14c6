"""Loader for the system-info JSON document."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from install_verifier.domain.errors import SystemInfoError
from install_verifier.infrastructure.parsing.utils import read_json_document


def load_system_info(path: str | Path) -> Mapping[str, Any]:
    data = read_json_document(path, SystemInfoError)
    if not isinstance(data, dict):
        raise SystemInfoError(f"System info in {path} must be a JSON object")
    return data
