import json
import logging
from pathlib import Path

import pytest

from install_verifier import cli
from install_verifier.config import SETTINGS
from install_verifier.domain.models import Host

from fakes import make_context, make_system_info_data


@pytest.fixture
def components_file(tmp_path: Path) -> Path:
    path = tmp_path / "components.json"
    path.write_text(json.dumps([{"path": "comp/a", "hosts": ["h1"]}]), encoding="utf-8")
    return path


def test_exit_ok_when_everything_installed(monkeypatch, components_file, system_info_file, caplog):
    monkeypatch.setattr(cli, "build_context", lambda settings: make_context(local_hosts=[Host("h1")]))

    with caplog.at_level(logging.INFO):
        status = cli.main([str(components_file), str(system_info_file(make_system_info_data()))])

    assert status == cli.EXIT_OK
    assert "Congratulations! All the components are installed successfully!" in caplog.text


def test_exit_findings_and_exports(monkeypatch, components_file, system_info_file, tmp_path: Path):
    monkeypatch.setattr(cli, "build_context", lambda settings: make_context())
    csv_path = tmp_path / "findings.csv"
    html_path = tmp_path / "findings.html"

    status = cli.main(
        [
            str(components_file),
            str(system_info_file(make_system_info_data())),
            "--csv",
            str(csv_path),
            "--html",
            str(html_path),
        ]
    )

    assert status == cli.EXIT_FINDINGS
    assert "comp/a,host,h1,not found in any host registry" in csv_path.read_text(encoding="utf-8")
    assert "<td>comp/a</td>" in html_path.read_text(encoding="utf-8")


def test_exit_fatal_on_invalid_system_info(monkeypatch, components_file, system_info_file, caplog):
    monkeypatch.setattr(cli, "build_context", lambda settings: make_context())
    data = make_system_info_data()
    del data["postgresql"]

    status = cli.main([str(components_file), str(system_info_file(data))])

    assert status == cli.EXIT_FATAL
    assert "postgresql" in caplog.text


def test_exit_fatal_on_empty_service_nodes(monkeypatch, components_file, system_info_file):
    monkeypatch.setattr(cli, "build_context", lambda settings: make_context())

    status = cli.main([str(components_file), str(system_info_file(make_system_info_data(service_ips=[])))])

    assert status == cli.EXIT_FATAL


def test_settings_overrides():
    args = cli.parse_args(["c.json", "s.json", "--host-file", "/tmp/hosts", "--ssh-timeout", "2.5"])

    settings = cli.settings_from_args(args)

    assert settings.host_file == Path("/tmp/hosts")
    assert settings.ssh_timeout == 2.5
    assert settings.db_connect_timeout == SETTINGS.db_connect_timeout
    assert SETTINGS.host_file == Path("/etc/hosts")


def test_exit_fatal_on_bad_alias_type(monkeypatch, system_info_file, tmp_path: Path, caplog):
    monkeypatch.setattr(cli, "build_context", lambda settings: make_context())
    components_path = tmp_path / "components.json"
    components = [{"path": "comp/a", "hosts": [{"name": "h1", "aliases": 5}]}]
    components_path.write_text(json.dumps(components), encoding="utf-8")

    status = cli.main([str(components_path), str(system_info_file(make_system_info_data()))])

    assert status == cli.EXIT_FATAL
    assert "aliases must be an array" in caplog.text


def test_exit_fatal_on_non_utf8_components(monkeypatch, system_info_file, tmp_path: Path):
    monkeypatch.setattr(cli, "build_context", lambda settings: make_context())
    components_path = tmp_path / "components.json"
    components_path.write_bytes(b"\xff\xfe[]")

    status = cli.main([str(components_path), str(system_info_file(make_system_info_data()))])

    assert status == cli.EXIT_FATAL


def test_host_key_policy_setting():
    assert SETTINGS.ssh_host_key_policy == "reject"

    args = cli.parse_args(["c.json", "s.json", "--ssh-host-key-policy", "warning"])

    assert cli.settings_from_args(args).ssh_host_key_policy == "warning"
    with pytest.raises(SystemExit):
        cli.parse_args(["c.json", "s.json", "--ssh-host-key-policy", "trust-everyone"])
