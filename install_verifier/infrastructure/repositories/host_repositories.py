"""Host registries read from the local file system and over SSH."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Sequence

from install_verifier.config import SETTINGS
from install_verifier.domain.errors import ResolutionError
from install_verifier.domain.models import Host
from install_verifier.domain.repositories import LocalHostRepository, RemoteHostRepository
from install_verifier.domain.system_info import NodeInfo
from install_verifier.infrastructure.parsing.hosts import parse_hosts_text

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(self, node: NodeInfo, command: str) -> str:
        ...


class LocalHostFileRepository(LocalHostRepository):
    def __init__(self, path: Path | str = SETTINGS.host_file) -> None:
        self._path = Path(path)

    def list_hosts(self) -> Sequence[Host]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ResolutionError(f"Cannot read host file {self._path}: {exc}") from exc
        hosts = parse_hosts_text(text, source=str(self._path))
        logger.info("Found %d hosts in %s", len(hosts), self._path)
        return hosts


class SshHostRepository(RemoteHostRepository):
    def __init__(self, runner: CommandRunner, command: str = SETTINGS.remote_hosts_command) -> None:
        self._runner = runner
        self._command = command

    def list_hosts(self, node: NodeInfo) -> Sequence[Host]:
        hosts = parse_hosts_text(self._runner.run(node, self._command), source=node.ip)
        logger.info("Found %d hosts on application node %s", len(hosts), node.ip)
        return hosts
