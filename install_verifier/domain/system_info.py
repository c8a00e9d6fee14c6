"""Typed view of the system-info document."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from .errors import SystemInfoError

KEY_POSTGRES = "postgresql"
KEY_CS_NODES = "cluster_service_nodes"
KEY_APP_NODES = "cluster_app_nodes"

NODE_FIELDS = ("ip", "user", "password")
DATABASE_FIELDS = ("host", "sid", "user", "password")

DEFAULT_SSH_PORT = 22
DEFAULT_DB_PORT = 5432


@dataclass(frozen=True)
class NodeInfo:
    """Login details of a cluster node."""

    ip: str
    user: str
    password: str
    port: int = DEFAULT_SSH_PORT

    def __repr__(self) -> str:
        return f"NodeInfo(ip={self.ip!r}, user={self.user!r}, port={self.port})"


@dataclass(frozen=True)
class DatabaseInfo:
    """Connection details of the primary database."""

    host: str
    name: str
    user: str
    password: str
    port: int = DEFAULT_DB_PORT

    def __repr__(self) -> str:
        return f"DatabaseInfo(host={self.host!r}, name={self.name!r}, user={self.user!r}, port={self.port})"


@dataclass(frozen=True)
class SystemInfo:
    database: DatabaseInfo
    service_nodes: tuple[NodeInfo, ...]
    app_nodes: tuple[NodeInfo, ...]


def _missing_fields(raw: Mapping[str, Any], fields: Sequence[str], prefix: str) -> list[str]:
    return [f"{prefix}.{name}" for name in fields if raw.get(name) in (None, "")]


def _port(raw: Mapping[str, Any], default: int, prefix: str, problems: list[str]) -> int:
    value = raw.get("port")
    if value in (None, ""):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        problems.append(f"{prefix}.port (expected integer)")
        return default


def _parse_nodes(raw: Any, key: str, problems: list[str]) -> tuple[NodeInfo, ...]:
    if not isinstance(raw, list):
        problems.append(f"{key} (expected array)")
        return ()
    nodes: list[NodeInfo] = []
    for idx, item in enumerate(raw):
        prefix = f"{key}[{idx}]"
        if not isinstance(item, Mapping):
            problems.append(f"{prefix} (expected object)")
            continue
        missing = _missing_fields(item, NODE_FIELDS, prefix)
        if missing:
            problems.extend(missing)
            continue
        nodes.append(
            NodeInfo(
                ip=str(item["ip"]),
                user=str(item["user"]),
                password=str(item["password"]),
                port=_port(item, DEFAULT_SSH_PORT, prefix, problems),
            )
        )
    return tuple(nodes)


def _parse_database(raw: Any, problems: list[str]) -> DatabaseInfo | None:
    if not isinstance(raw, Mapping):
        problems.append(f"{KEY_POSTGRES} (expected object)")
        return None
    missing = _missing_fields(raw, DATABASE_FIELDS, KEY_POSTGRES)
    if missing:
        problems.extend(missing)
        return None
    return DatabaseInfo(
        host=str(raw["host"]),
        name=str(raw["sid"]),
        user=str(raw["user"]),
        password=str(raw["password"]),
        port=_port(raw, DEFAULT_DB_PORT, KEY_POSTGRES, problems),
    )


def parse_system_info(raw: Mapping[str, Any]) -> SystemInfo:
    """Validate a deserialized system-info document.

    Every problem found is reported at once through ``SystemInfoError.missing_keys``.
    """
    if not isinstance(raw, Mapping):
        raise SystemInfoError("System info must be a JSON object")

    missing_top = [key for key in (KEY_POSTGRES, KEY_CS_NODES, KEY_APP_NODES) if key not in raw]
    if missing_top:
        raise SystemInfoError("Invalid system info, missing required keys", missing_top)

    problems: list[str] = []
    database = _parse_database(raw[KEY_POSTGRES], problems)
    service_nodes = _parse_nodes(raw[KEY_CS_NODES], KEY_CS_NODES, problems)
    app_nodes = _parse_nodes(raw[KEY_APP_NODES], KEY_APP_NODES, problems)
    if problems or database is None:
        raise SystemInfoError("Invalid system info", problems)

    return SystemInfo(database=database, service_nodes=service_nodes, app_nodes=app_nodes)
