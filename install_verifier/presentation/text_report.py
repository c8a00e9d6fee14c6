"""Text rendering of verification reports and the sinks they are emitted to."""
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from install_verifier.domain.models import CATEGORIES, Finding
from install_verifier.domain.results import ComponentResult, VerificationReport

SUCCESS_MESSAGE = "Congratulations! All the components are installed successfully!"
FAILURE_HEADER = "These component(s) are not installed successfully:"
LINE_SEPARATOR = "\n"

REPORT_LOGGER = "install_verifier.report"


class ReportSink(Protocol):
    def emit(self, text: str) -> None:
        ...


class LoggingSink:
    """Writes reports to a logger at INFO level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(REPORT_LOGGER)

    def emit(self, text: str) -> None:
        self._logger.info(text)


def render_findings(findings: Sequence[Finding]) -> str:
    return "".join(f"  [{item.category}] {item.identity}: {item.reason}{LINE_SEPARATOR}" for item in findings)


def render_component(result: ComponentResult) -> str:
    """Render one component block, or an empty string when it has no findings."""
    by_category = {category: [f for f in result.findings if f.category == category] for category in CATEGORIES}
    body = "".join(render_findings(by_category[category]) for category in CATEGORIES)
    if not body:
        return ""
    return f"Component: {result.path}{LINE_SEPARATOR}{body}{LINE_SEPARATOR}"


def render_summary(report: VerificationReport) -> str:
    return "".join(render_component(result) for result in report.results)


def render_report(report: VerificationReport) -> str:
    summary = render_summary(report)
    if summary:
        return f"{FAILURE_HEADER}{LINE_SEPARATOR}{summary}"
    return SUCCESS_MESSAGE
