"""Domain models for installation verification.

Expected records come from a component description, actual records from the
resolvers. Both use the same dataclasses; optional attributes left as ``None``
on an expected record are not checked.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

HOST = "host"
ALERT = "alert"
TEMPLATE = "template"
RESOURCE = "resource"

CATEGORIES = (HOST, ALERT, TEMPLATE, RESOURCE)


@dataclass(frozen=True)
class Host:
    """An entry of a host registry, local or on a remote node."""

    name: str
    ip: str | None = None
    aliases: tuple[str, ...] = ()
    source: str | None = None

    def key(self) -> str:
        return self.name.lower()

    def names(self) -> set[str]:
        return {self.name.lower(), *(alias.lower() for alias in self.aliases)}


@dataclass(frozen=True)
class Alert:
    """An alerting rule known to a service-cluster node."""

    name: str
    condition: str | None = None
    severity: str | None = None

    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class Template:
    """A configuration template stored in the primary database."""

    name: str
    version: str | None = None

    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class Resourse:
    """A resource definition stored in the primary database."""

    name: str
    resource_type: str | None = None

    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class Component:
    """Expected state of one deployed unit."""

    path: str
    hosts: Sequence[Host] = field(default_factory=tuple)
    alerts: Sequence[Alert] = field(default_factory=tuple)
    templates: Sequence[Template] = field(default_factory=tuple)
    resources: Sequence[Resourse] = field(default_factory=tuple)


@dataclass(frozen=True)
class ActualStateSnapshot:
    """Everything found installed, resolved once per run."""

    hosts: tuple[Host, ...] = ()
    alerts: tuple[Alert, ...] = ()
    templates: tuple[Template, ...] = ()
    resources: tuple[Resourse, ...] = ()


@dataclass(frozen=True)
class Finding:
    """An expected record not satisfied by the actual state."""

    category: str
    identity: str
    reason: str
