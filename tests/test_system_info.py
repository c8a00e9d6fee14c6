import pytest

from install_verifier.domain.errors import SystemInfoError
from install_verifier.domain.system_info import DatabaseInfo, NodeInfo, parse_system_info


def make_raw() -> dict:
    return {
        "postgresql": {"host": "db.local", "sid": "cmdb", "user": "verifier", "password": "secret"},
        "cluster_service_nodes": [{"ip": "10.0.1.1", "user": "root", "password": "pw1"}],
        "cluster_app_nodes": [
            {"ip": "10.0.2.1", "user": "app", "password": "pw2"},
            {"ip": "10.0.2.2", "user": "app", "password": "pw3", "port": "2222"},
        ],
    }


def test_parse_valid_system_info():
    info = parse_system_info(make_raw())

    assert info.database == DatabaseInfo(host="db.local", name="cmdb", user="verifier", password="secret")
    assert info.service_nodes == (NodeInfo(ip="10.0.1.1", user="root", password="pw1"),)
    assert [node.ip for node in info.app_nodes] == ["10.0.2.1", "10.0.2.2"]
    assert info.app_nodes[1].port == 2222


@pytest.mark.parametrize("key", ["postgresql", "cluster_service_nodes", "cluster_app_nodes"])
def test_missing_top_level_key(key: str):
    raw = make_raw()
    del raw[key]

    with pytest.raises(SystemInfoError) as excinfo:
        parse_system_info(raw)

    assert excinfo.value.missing_keys == (key,)
    assert key in str(excinfo.value)


def test_all_missing_fields_reported_together():
    raw = make_raw()
    del raw["postgresql"]["password"]
    raw["cluster_app_nodes"][1]["ip"] = ""
    raw["cluster_service_nodes"] = {"ip": "10.0.1.1"}

    with pytest.raises(SystemInfoError) as excinfo:
        parse_system_info(raw)

    assert excinfo.value.missing_keys == (
        "postgresql.password",
        "cluster_service_nodes (expected array)",
        "cluster_app_nodes[1].ip",
    )


def test_empty_node_lists_are_valid():
    raw = make_raw()
    raw["cluster_service_nodes"] = []
    raw["cluster_app_nodes"] = []

    info = parse_system_info(raw)

    assert info.service_nodes == ()
    assert info.app_nodes == ()


def test_repr_hides_passwords():
    info = parse_system_info(make_raw())

    assert "secret" not in repr(info.database)
    assert "pw1" not in repr(info.service_nodes[0])
