"""Repository interfaces for the actual-state sources."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import Alert, Host, Resourse, Template
from .system_info import DatabaseInfo, NodeInfo


class LocalHostRepository(Protocol):
    """Provides hosts registered on the machine running the verification."""

    def list_hosts(self) -> Sequence[Host]:
        ...


class RemoteHostRepository(Protocol):
    """Provides hosts registered on an application node."""

    def list_hosts(self, node: NodeInfo) -> Sequence[Host]:
        ...


class AlertRepository(Protocol):
    """Provides alert definitions known to a service-cluster node."""

    def list_alerts(self, node: NodeInfo) -> Sequence[Alert]:
        ...


class TemplateRepository(Protocol):
    def list_templates(self, database: DatabaseInfo) -> Sequence[Template]:
        ...


class ResourseRepository(Protocol):
    def list_resources(self, database: DatabaseInfo) -> Sequence[Resourse]:
        ...
