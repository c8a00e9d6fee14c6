"""Shared parsing utilities for the verification inputs."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from install_verifier.domain.errors import VerificationError


def parse_json_bytes(data: bytes, source: str, error_cls: type[VerificationError]) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise error_cls(f"{source} is not UTF-8 encoded: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise error_cls(f"Malformed JSON in {source}: {exc}") from exc


def read_json_document(path: str | Path, error_cls: type[VerificationError]) -> Any:
    source = Path(path)
    try:
        data = source.read_bytes()
    except OSError as exc:
        raise error_cls(f"Cannot read {source}: {exc}") from exc
    return parse_json_bytes(data, str(source), error_cls)


def clean_text(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        # integer columns holding NULLs come back from pandas as float64
        value = int(value)
    s = str(value).strip()
    if s.upper() == "NAN":
        return ""
    return s


def clean_optional(value: object) -> str | None:
    return clean_text(value) or None
