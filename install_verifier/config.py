"""Central configuration for the installation verifier."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

HOST_FILE = Path("/etc/hosts")

REMOTE_HOSTS_COMMAND = "cat /etc/hosts"
REMOTE_ALERTS_COMMAND = "verify-cli alerts --format json"

TEMPLATE_QUERY = "SELECT name, version FROM templates ORDER BY name"
RESOURCE_QUERY = "SELECT name, resource_type FROM resources ORDER BY name"


@dataclass(slots=True, frozen=True)
class Settings:
    host_file: Path
    remote_hosts_command: str
    remote_alerts_command: str
    ssh_timeout: float
    ssh_host_key_policy: str
    db_connect_timeout: int
    template_query: str
    resource_query: str


SETTINGS = Settings(
    host_file=HOST_FILE,
    remote_hosts_command=REMOTE_HOSTS_COMMAND,
    remote_alerts_command=REMOTE_ALERTS_COMMAND,
    ssh_timeout=30.0,
    ssh_host_key_policy="reject",
    db_connect_timeout=10,
    template_query=TEMPLATE_QUERY,
    resource_query=RESOURCE_QUERY,
)
