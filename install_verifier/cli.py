"""Command-line entrypoint for installation verification."""
from __future__ import annotations

import argparse
import dataclasses
import functools
import logging
import sys
from pathlib import Path

from install_verifier.application.use_cases import VerificationContext, verify
from install_verifier.config import SETTINGS, Settings
from install_verifier.domain.errors import VerificationError
from install_verifier.infrastructure.parsing.components import load_components
from install_verifier.infrastructure.remote.ssh import HOST_KEY_POLICIES, SshCommandRunner
from install_verifier.infrastructure.repositories.alert_repositories import SshAlertRepository
from install_verifier.infrastructure.repositories.host_repositories import LocalHostFileRepository, SshHostRepository
from install_verifier.infrastructure.repositories.postgres_repositories import (
    PostgresResourseRepository,
    PostgresTemplateRepository,
    connect_postgres,
)
from install_verifier.presentation.diff_report import render_csv, render_html

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def build_context(settings: Settings = SETTINGS) -> VerificationContext:
    runner = SshCommandRunner(timeout=settings.ssh_timeout, host_key_policy=settings.ssh_host_key_policy)
    connect = functools.partial(connect_postgres, timeout=settings.db_connect_timeout)
    return VerificationContext(
        local_hosts=LocalHostFileRepository(settings.host_file),
        remote_hosts=SshHostRepository(runner, settings.remote_hosts_command),
        alerts=SshAlertRepository(runner, settings.remote_alerts_command),
        templates=PostgresTemplateRepository(settings.template_query, connect),
        resources=PostgresResourseRepository(settings.resource_query, connect),
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify that components are installed on a deployment")
    parser.add_argument("components", type=str, help="Path to the expected components JSON file")
    parser.add_argument("system_info", type=str, help="Path to the system info JSON file")
    parser.add_argument("--host-file", type=str, help=f"Local host registry (default {SETTINGS.host_file})")
    parser.add_argument("--ssh-timeout", type=float, help="Per-call SSH timeout in seconds")
    parser.add_argument(
        "--ssh-host-key-policy",
        choices=sorted(HOST_KEY_POLICIES),
        help=f"How to treat hosts missing from known_hosts (default {SETTINGS.ssh_host_key_policy})",
    )
    parser.add_argument("--db-timeout", type=int, help="Database connect timeout in seconds")
    parser.add_argument("--csv", type=str, help="Also write the findings as CSV to this path")
    parser.add_argument("--html", type=str, help="Also write the findings as an HTML table to this path")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (default INFO)")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.host_file:
        overrides["host_file"] = Path(args.host_file)
    if args.ssh_timeout is not None:
        overrides["ssh_timeout"] = args.ssh_timeout
    if args.ssh_host_key_policy:
        overrides["ssh_host_key_policy"] = args.ssh_host_key_policy
    if args.db_timeout is not None:
        overrides["db_connect_timeout"] = args.db_timeout
    return dataclasses.replace(SETTINGS, **overrides)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        components = load_components(args.components)
        report = verify(components, args.system_info, build_context(settings_from_args(args)))
    except VerificationError as exc:
        logger.error("Verification aborted: %s", exc)
        return EXIT_FATAL

    if args.csv:
        Path(args.csv).write_bytes(render_csv(report))
    if args.html:
        Path(args.html).write_text(render_html(report), encoding="utf-8")

    return EXIT_FINDINGS if report.has_issues() else EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
