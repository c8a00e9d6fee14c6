"""Password-authenticated SSH command execution on cluster nodes."""
from __future__ import annotations

import logging
from typing import Callable

import paramiko

from install_verifier.config import SETTINGS
from install_verifier.domain.errors import ResolutionError
from install_verifier.domain.system_info import NodeInfo

logger = logging.getLogger(__name__)

HOST_KEY_POLICIES: dict[str, type[paramiko.MissingHostKeyPolicy]] = {
    "reject": paramiko.RejectPolicy,
    "warning": paramiko.WarningPolicy,
    "auto-add": paramiko.AutoAddPolicy,
}


class SshCommandRunner:
    """Runs one command per session and returns its standard output.

    Host keys are checked against the system known_hosts files; unknown keys
    are handled by ``host_key_policy``, one of ``HOST_KEY_POLICIES``.
    """

    def __init__(
        self,
        timeout: float = SETTINGS.ssh_timeout,
        host_key_policy: str = SETTINGS.ssh_host_key_policy,
        client_factory: Callable[[], paramiko.SSHClient] = paramiko.SSHClient,
    ) -> None:
        if host_key_policy not in HOST_KEY_POLICIES:
            raise ValueError(f"Unknown host key policy {host_key_policy!r}")
        self._timeout = timeout
        self._policy = HOST_KEY_POLICIES[host_key_policy]
        self._client_factory = client_factory

    def run(self, node: NodeInfo, command: str) -> str:
        logger.debug("Running %r on %s:%d as %s", command, node.ip, node.port, node.user)
        client = self._client_factory()
        client.set_missing_host_key_policy(self._policy())
        try:
            client.load_system_host_keys()
            client.connect(
                node.ip,
                port=node.port,
                username=node.user,
                password=node.password,
                timeout=self._timeout,
                auth_timeout=self._timeout,
                banner_timeout=self._timeout,
                look_for_keys=False,
                allow_agent=False,
            )
            _, stdout, stderr = client.exec_command(command, timeout=self._timeout)
            output = stdout.read().decode("utf-8", errors="replace")
            errors = stderr.read().decode("utf-8", errors="replace")
            exit_status = stdout.channel.recv_exit_status()
        except paramiko.AuthenticationException as exc:
            raise ResolutionError(f"Authentication failed for {node.user}@{node.ip}") from exc
        except (paramiko.SSHException, OSError) as exc:
            raise ResolutionError(f"SSH session to {node.ip} failed: {exc}") from exc
        finally:
            client.close()

        if exit_status != 0:
            raise ResolutionError(
                f"Command {command!r} on {node.ip} exited with status {exit_status}: {errors.strip()}"
            )
        return output
