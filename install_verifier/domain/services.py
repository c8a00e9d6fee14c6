"""Domain services implementing the per-category comparison rules."""
from __future__ import annotations

from collections import defaultdict
from typing import Generic, Iterable, Mapping, Sequence, TypeVar

from .models import (
    ALERT,
    HOST,
    RESOURCE,
    TEMPLATE,
    ActualStateSnapshot,
    Alert,
    Component,
    Finding,
    Host,
    Resourse,
    Template,
)

RecordT = TypeVar("RecordT", Host, Alert, Template, Resourse)


class CategoryValidator(Generic[RecordT]):
    """Checks that every expected record of one category is installed.

    A record matches when an actual record shares its identity and agrees on
    every checked field the expected record sets.
    """

    category: str = ""
    checked_fields: tuple[str, ...] = ()
    missing_reason: str = "not installed"

    def validate(self, expected: Sequence[RecordT], actual: Sequence[RecordT]) -> tuple[Finding, ...]:
        index = self._index(actual)
        findings: list[Finding] = []
        for record in expected:
            candidates = index.get(record.key(), [])
            if any(not self._differences(record, candidate) for candidate in candidates):
                continue
            findings.append(
                Finding(
                    category=self.category,
                    identity=record.name,
                    reason=self._reason(record, candidates),
                )
            )
        return tuple(findings)

    def _index(self, records: Iterable[RecordT]) -> Mapping[str, list[RecordT]]:
        index: dict[str, list[RecordT]] = defaultdict(list)
        for record in records:
            index[record.key()].append(record)
        return index

    def _differences(self, expected: RecordT, actual: RecordT) -> list[str]:
        differences = []
        for name in self.checked_fields:
            wanted = getattr(expected, name)
            if wanted is None:
                continue
            found = getattr(actual, name)
            if wanted != found:
                differences.append(f"{name} mismatch: expected {wanted}, found {found}")
        return differences

    def _reason(self, expected: RecordT, candidates: Sequence[RecordT]) -> str:
        if not candidates:
            return self.missing_reason
        return "; ".join(self._differences(expected, candidates[0]))


class HostValidator(CategoryValidator[Host]):
    category = HOST
    checked_fields = ("ip",)
    missing_reason = "not found in any host registry"

    def _index(self, records: Iterable[Host]) -> Mapping[str, list[Host]]:
        index: dict[str, list[Host]] = defaultdict(list)
        for record in records:
            for name in sorted(record.names()):
                index[name].append(record)
        return index


class AlertValidator(CategoryValidator[Alert]):
    category = ALERT
    checked_fields = ("condition", "severity")
    missing_reason = "not defined on the service node"


class TemplateValidator(CategoryValidator[Template]):
    category = TEMPLATE
    checked_fields = ("version",)
    missing_reason = "not found in the database"


class ResourceValidator(CategoryValidator[Resourse]):
    category = RESOURCE
    checked_fields = ("resource_type",)
    missing_reason = "not found in the database"


class ComponentVerifier:
    """Runs the four category validators, in fixed order, for one component."""

    def __init__(
        self,
        host_validator: HostValidator | None = None,
        alert_validator: AlertValidator | None = None,
        template_validator: TemplateValidator | None = None,
        resource_validator: ResourceValidator | None = None,
    ) -> None:
        self._hosts = host_validator or HostValidator()
        self._alerts = alert_validator or AlertValidator()
        self._templates = template_validator or TemplateValidator()
        self._resources = resource_validator or ResourceValidator()

    def verify(self, component: Component, snapshot: ActualStateSnapshot) -> tuple[Finding, ...]:
        return (
            self._hosts.validate(component.hosts, snapshot.hosts)
            + self._alerts.validate(component.alerts, snapshot.alerts)
            + self._templates.validate(component.templates, snapshot.templates)
            + self._resources.validate(component.resources, snapshot.resources)
        )
