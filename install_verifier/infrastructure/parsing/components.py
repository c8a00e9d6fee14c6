"""Loader for the expected-components JSON document."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence, TypeVar

from install_verifier.domain.errors import ComponentSpecError
from install_verifier.domain.models import Alert, Component, Host, Resourse, Template
from install_verifier.infrastructure.parsing.utils import (
    clean_optional,
    clean_text,
    parse_json_bytes,
    read_json_document,
)

RecordT = TypeVar("RecordT")


def _host(entry: dict[str, Any], where: str) -> Host:
    aliases = entry.get("aliases") or []
    if isinstance(aliases, str):
        aliases = [aliases]
    if not isinstance(aliases, list):
        raise ComponentSpecError(f"{where}.aliases must be an array")
    return Host(
        name=clean_text(entry["name"]),
        ip=clean_optional(entry.get("ip")),
        aliases=tuple(clean_text(alias) for alias in aliases if clean_text(alias)),
    )


def _alert(entry: dict[str, Any], where: str) -> Alert:
    return Alert(
        name=clean_text(entry["name"]),
        condition=clean_optional(entry.get("condition")),
        severity=clean_optional(entry.get("severity")),
    )


def _template(entry: dict[str, Any], where: str) -> Template:
    return Template(name=clean_text(entry["name"]), version=clean_optional(entry.get("version")))


def _resource(entry: dict[str, Any], where: str) -> Resourse:
    return Resourse(name=clean_text(entry["name"]), resource_type=clean_optional(entry.get("resource_type")))


def _records(
    raw: Any,
    key: str,
    prefix: str,
    build: Callable[[dict[str, Any], str], RecordT],
) -> tuple[RecordT, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ComponentSpecError(f"{prefix}.{key} must be an array")
    records: list[RecordT] = []
    for idx, entry in enumerate(raw):
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not clean_text(entry.get("name")):
            raise ComponentSpecError(f"{prefix}.{key}[{idx}] needs a name")
        records.append(build(entry, f"{prefix}.{key}[{idx}]"))
    return tuple(records)


def components_from_data(data: Any) -> list[Component]:
    if not isinstance(data, list):
        raise ComponentSpecError("Expected components must be a JSON array")
    components: list[Component] = []
    for idx, item in enumerate(data):
        prefix = f"components[{idx}]"
        if not isinstance(item, dict) or not clean_text(item.get("path")):
            raise ComponentSpecError(f"{prefix} needs a path")
        components.append(
            Component(
                path=clean_text(item["path"]),
                hosts=_records(item.get("hosts"), "hosts", prefix, _host),
                alerts=_records(item.get("alerts"), "alerts", prefix, _alert),
                templates=_records(item.get("templates"), "templates", prefix, _template),
                resources=_records(item.get("resources"), "resources", prefix, _resource),
            )
        )
    return components


def load_components(path: str | Path) -> Sequence[Component]:
    return components_from_data(read_json_document(path, ComponentSpecError))


def components_from_bytes(data: bytes, source: str = "uploaded components") -> Sequence[Component]:
    return components_from_data(parse_json_bytes(data, source, ComponentSpecError))
