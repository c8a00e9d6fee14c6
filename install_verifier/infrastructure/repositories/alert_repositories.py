"""Alert definitions listed by a service-cluster node over SSH."""
from __future__ import annotations

import logging
from typing import Sequence

from install_verifier.config import SETTINGS
from install_verifier.domain.models import Alert
from install_verifier.domain.repositories import AlertRepository
from install_verifier.domain.system_info import NodeInfo
from install_verifier.infrastructure.parsing.alerts import parse_alerts_json
from install_verifier.infrastructure.repositories.host_repositories import CommandRunner

logger = logging.getLogger(__name__)


class SshAlertRepository(AlertRepository):
    def __init__(self, runner: CommandRunner, command: str = SETTINGS.remote_alerts_command) -> None:
        self._runner = runner
        self._command = command

    def list_alerts(self, node: NodeInfo) -> Sequence[Alert]:
        alerts = parse_alerts_json(self._runner.run(node, self._command), source=node.ip)
        logger.info("Found %d alerts on service node %s", len(alerts), node.ip)
        return alerts
