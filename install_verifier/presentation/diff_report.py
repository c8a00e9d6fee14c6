"""Tabular exports of verification findings."""
from __future__ import annotations

import csv
import html
import io

import pandas as pd

from install_verifier.domain.results import VerificationReport

COLUMNS = ["component", "category", "identity", "reason"]


def findings_to_rows(report: VerificationReport) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for path, finding in report.iter_all_findings():
        rows.append(
            {
                "component": path,
                "category": finding.category,
                "identity": finding.identity,
                "reason": finding.reason,
            }
        )
    return rows


def findings_to_dataframe(report: VerificationReport) -> pd.DataFrame:
    return pd.DataFrame(findings_to_rows(report), columns=COLUMNS)


def render_csv(report: VerificationReport) -> bytes:
    rows = findings_to_rows(report)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(report: VerificationReport) -> str:
    rows = findings_to_rows(report)
    if not rows:
        return "<p>All components are installed.</p>"
    header = "".join(f"<th>{col}</th>" for col in COLUMNS)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(row[col])}</td>" for col in COLUMNS) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
