"""Streamlit front-end for the installation verifier."""
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

from install_verifier import verify
from install_verifier.cli import build_context
from install_verifier.domain.errors import VerificationError
from install_verifier.domain.results import VerificationReport
from install_verifier.infrastructure.parsing.components import components_from_bytes
from install_verifier.presentation.diff_report import findings_to_dataframe, render_csv, render_html
from install_verifier.presentation.text_report import render_report


st.set_page_config(page_title="Installation Verifier", layout="wide")
st.title("Installation Verification")


class SessionSink:
    def __init__(self) -> None:
        self.text = ""

    def emit(self, text: str) -> None:
        self.text = text


def run_verification(components_bytes: bytes, system_info_bytes: bytes) -> tuple[VerificationReport, str]:
    components = components_from_bytes(components_bytes)
    with tempfile.TemporaryDirectory() as tmp:
        system_info_path = Path(tmp) / "system_info.json"
        system_info_path.write_bytes(system_info_bytes)
        sink = SessionSink()
        report = verify(components, system_info_path, build_context(), sink=sink)
    return report, sink.text


if "result" not in st.session_state:
    st.session_state["result"] = None

col1, col2 = st.columns(2)
with col1:
    components_file = st.file_uploader("Upload expected components", type=["json"])
with col2:
    system_info_file = st.file_uploader("Upload system info", type=["json"])

run_btn = st.button("Run Verification", disabled=not (components_file and system_info_file))
if run_btn and components_file and system_info_file:
    with st.spinner("Resolving installed state..."):
        try:
            report, text = run_verification(components_file.read(), system_info_file.read())
        except VerificationError as exc:
            st.error(f"Verification aborted: {exc}")
            st.session_state["result"] = None
        else:
            st.session_state["result"] = {"report": report, "text": text}

result = st.session_state.get("result")
if result:
    report: VerificationReport = result["report"]
    summary = report.summary

    st.subheader("Summary")
    cols = st.columns(6)
    cols[0].metric("Components", summary.total_components)
    cols[1].metric("Failed", summary.failed_components)
    cols[2].metric("Missing hosts", summary.missing_hosts)
    cols[3].metric("Missing alerts", summary.missing_alerts)
    cols[4].metric("Missing templates", summary.missing_templates)
    cols[5].metric("Missing resources", summary.missing_resources)

    if report.has_issues():
        st.warning("One or more components are not installed successfully.")
    else:
        st.success(render_report(report))

    tabs = st.tabs(["Findings", "Report"])
    with tabs[0]:
        findings_df: pd.DataFrame = findings_to_dataframe(report)
        st.dataframe(findings_df, use_container_width=True)
        st.download_button(
            "Download findings CSV",
            data=render_csv(report),
            file_name="install_findings.csv",
            mime="text/csv",
        )
        st.download_button(
            "Download findings HTML",
            data=render_html(report).encode("utf-8"),
            file_name="install_findings.html",
            mime="text/html",
        )
    with tabs[1]:
        st.code(result["text"], language="text")
