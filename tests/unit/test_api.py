"""Unit tests for the read-only HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pcisysfs.api.app import create_app


@pytest.fixture
def client(config):
    with TestClient(create_app(config)) as client:
        yield client


class TestPciRoutes:
    def test_list_devices(self, client):
        resp = client.get("/api/pci/devices")
        assert resp.status_code == 200
        data = resp.json()
        assert sorted(data) == ["0000:00:02:1", "0000:00:03:0", "0000:00:1c:0", "0000:01:00:0"]
        assert data["0000:01:00:0"]["vendor"] == 0x15B3
        assert data["0000:01:00:0"]["parent_location"] == {
            "segment": 0, "bus": 0, "device": 2, "function": 1,
        }

    def test_device_aer(self, client):
        resp = client.get("/api/pci/devices/0000:00:02.1/aer")
        assert resp.status_code == 200
        data = resp.json()
        assert data["correctable"]["RxErr"] == 101
        assert data["non_fatal"]["Undefined"] == 301
        assert data["root_port_total_err_nonfatal"] == 3

    def test_device_aer_not_supported(self, client):
        resp = client.get("/api/pci/devices/0000:00:1c.0/aer")
        assert resp.status_code == 200
        assert resp.json() is None

    def test_device_aer_bad_location(self, client):
        resp = client.get("/api/pci/devices/bogus/aer")
        assert resp.status_code == 400

    def test_device_aer_trailing_newline(self, client):
        resp = client.get("/api/pci/devices/0000:00:02.1%0A/aer")
        assert resp.status_code == 400

    def test_device_aer_parse_failure(self, client, config):
        (config.pci_devices_dir / "0000:00:02.1" / "aer_dev_fatal").write_text("DLP many\n")
        resp = client.get("/api/pci/devices/0000:00:02.1/aer")
        assert resp.status_code == 500
        assert "aer_dev_fatal" in resp.json()["detail"]

    def test_devices_parse_failure(self, client, config):
        (config.pci_devices_dir / "0000:01:00.0" / "max_link_speed").write_text("8.0 GB/s\n")
        resp = client.get("/api/pci/devices")
        assert resp.status_code == 500
        assert "max_link_speed" in resp.json()["detail"]

    def test_root_port_parse_failure(self, client, config):
        (config.pcieport_driver_dir / "0000:00:03.0" / "aer_rootport_total_err_cor").write_text("9" * 5000)
        resp = client.get("/api/pci/rootports/aer")
        assert resp.status_code == 500
        assert "aer_rootport_total_err_cor" in resp.json()["detail"]

    def test_device_aer_unknown_device(self, client):
        resp = client.get("/api/pci/devices/0000:42:00.0/aer")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Device not found"

    def test_root_port_aer(self, client):
        resp = client.get("/api/pci/rootports/aer")
        assert resp.status_code == 200
        assert resp.json()["0000:00:03.0"] == {
            "total_err_cor": 4, "total_err_fatal": 5, "total_err_nonfatal": 6,
        }


class TestNetRoutes:
    def test_all_interfaces(self, client):
        resp = client.get("/api/net/aer")
        assert resp.status_code == 200
        data = resp.json()
        assert sorted(data) == ["eth0", "eth1"]
        assert data["eth0"]["correctable"]["HeaderOF"] == 8
        assert data["eth1"] is None

    def test_single_interface(self, client):
        resp = client.get("/api/net/eth0/aer")
        assert resp.status_code == 200
        assert resp.json()["name"] == "eth0"

    def test_unknown_interface(self, client):
        resp = client.get("/api/net/wlan9/aer")
        assert resp.status_code == 404

    def test_interface_parse_failure(self, client, config):
        (config.net_class_dir / "eth0" / "device" / "aer_dev_correctable").write_text("RxErr\n")
        assert client.get("/api/net/eth0/aer").status_code == 500
        resp = client.get("/api/net/aer")
        assert resp.status_code == 500
        assert "aer_dev_correctable" in resp.json()["detail"]
