"""Application services orchestrating the installation verification workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from install_verifier.domain.errors import NoServiceNodeError
from install_verifier.domain.models import ActualStateSnapshot, Alert, Component, Host
from install_verifier.domain.repositories import (
    AlertRepository,
    LocalHostRepository,
    RemoteHostRepository,
    ResourseRepository,
    TemplateRepository,
)
from install_verifier.domain.results import ComponentResult, VerificationReport
from install_verifier.domain.services import ComponentVerifier
from install_verifier.domain.system_info import NodeInfo, SystemInfo, parse_system_info
from install_verifier.infrastructure.parsing.system_info import load_system_info
from install_verifier.presentation.text_report import LoggingSink, ReportSink, render_report

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VerificationContext:
    local_hosts: LocalHostRepository
    remote_hosts: RemoteHostRepository
    alerts: AlertRepository
    templates: TemplateRepository
    resources: ResourseRepository
    verifier: ComponentVerifier = field(default_factory=ComponentVerifier)


class VerifyInstallationUseCase:
    def __init__(self, context: VerificationContext) -> None:
        self._context = context

    def resolve(self, system_info: SystemInfo) -> ActualStateSnapshot:
        """Read every actual-state source once."""
        snapshot = ActualStateSnapshot(
            hosts=self._resolve_hosts(system_info.app_nodes),
            alerts=self._resolve_alerts(system_info.service_nodes),
            templates=tuple(self._context.templates.list_templates(system_info.database)),
            resources=tuple(self._context.resources.list_resources(system_info.database)),
        )
        logger.info(
            "Resolved %d hosts, %d alerts, %d templates, %d resources",
            len(snapshot.hosts),
            len(snapshot.alerts),
            len(snapshot.templates),
            len(snapshot.resources),
        )
        return snapshot

    def execute(self, components: Sequence[Component], system_info: SystemInfo) -> VerificationReport:
        snapshot = self.resolve(system_info)
        results = [
            ComponentResult(path=component.path, findings=self._context.verifier.verify(component, snapshot))
            for component in components
        ]
        return VerificationReport.from_results(results)

    def _resolve_hosts(self, app_nodes: Sequence[NodeInfo]) -> tuple[Host, ...]:
        hosts: list[Host] = list(self._context.local_hosts.list_hosts())
        for node in app_nodes:
            hosts.extend(self._context.remote_hosts.list_hosts(node))
        return tuple(hosts)

    def _resolve_alerts(self, service_nodes: Sequence[NodeInfo]) -> tuple[Alert, ...]:
        # Only the first service node is consulted; the others are not queried.
        if not service_nodes:
            raise NoServiceNodeError("No service-cluster node available to resolve alerts from")
        return tuple(self._context.alerts.list_alerts(service_nodes[0]))


def verify(
    components: Sequence[Component],
    system_info_path: str | Path,
    context: VerificationContext,
    sink: ReportSink | None = None,
) -> VerificationReport:
    """Verify ``components`` against the deployment described by ``system_info_path``.

    The rendered report is emitted once through ``sink``. Input and resolution
    errors propagate to the caller and nothing is emitted.
    """
    system_info = parse_system_info(load_system_info(system_info_path))
    report = VerifyInstallationUseCase(context).execute(components, system_info)
    (sink or LoggingSink()).emit(render_report(report))
    return report
