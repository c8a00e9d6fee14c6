"""Parser for the alert listing printed by a service-cluster node."""
from __future__ import annotations

import json
from typing import Sequence

from install_verifier.domain.errors import ResolutionError
from install_verifier.domain.models import Alert
from install_verifier.infrastructure.parsing.utils import clean_optional, clean_text


def parse_alerts_json(text: str, source: str = "service node") -> Sequence[Alert]:
    try:
        data = json.loads(text or "[]")
    except json.JSONDecodeError as exc:
        raise ResolutionError(f"Malformed alert listing from {source}: {exc}") from exc
    if not isinstance(data, list):
        raise ResolutionError(f"Alert listing from {source} is not a JSON array")

    alerts: list[Alert] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ResolutionError(f"Unexpected alert entry from {source}: {entry!r}")
        name = clean_text(entry.get("name"))
        if not name:
            continue
        alerts.append(
            Alert(
                name=name,
                condition=clean_optional(entry.get("condition")),
                severity=clean_optional(entry.get("severity")),
            )
        )
    return alerts
