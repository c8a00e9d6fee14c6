"""Domain-level results for installation verification."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Sequence

from .models import ALERT, HOST, RESOURCE, TEMPLATE, Finding


@dataclass(frozen=True)
class ComponentResult:
    path: str
    findings: Sequence[Finding] = field(default_factory=tuple)

    @property
    def failed(self) -> bool:
        return bool(self.findings)


@dataclass(frozen=True)
class VerificationSummary:
    total_components: int
    failed_components: int
    missing_hosts: int
    missing_alerts: int
    missing_templates: int
    missing_resources: int
    generated_at: datetime


@dataclass(frozen=True)
class VerificationReport:
    summary: VerificationSummary
    results: Sequence[ComponentResult] = field(default_factory=tuple)

    @classmethod
    def from_results(cls, results: Sequence[ComponentResult]) -> "VerificationReport":
        counts = Counter(finding.category for result in results for finding in result.findings)
        summary = VerificationSummary(
            total_components=len(results),
            failed_components=len([result for result in results if result.failed]),
            missing_hosts=counts[HOST],
            missing_alerts=counts[ALERT],
            missing_templates=counts[TEMPLATE],
            missing_resources=counts[RESOURCE],
            generated_at=datetime.now(timezone.utc),
        )
        return cls(summary=summary, results=tuple(results))

    def has_issues(self) -> bool:
        return self.summary.failed_components > 0

    def failed_components(self) -> tuple[ComponentResult, ...]:
        return tuple(result for result in self.results if result.failed)

    def iter_all_findings(self) -> Iterable[tuple[str, Finding]]:
        for result in self.results:
            for finding in result.findings:
                yield result.path, finding
