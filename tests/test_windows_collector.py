import psutil
import pytest

from healthreport.collectors import windows_collector
from healthreport.collectors.windows_collector import WindowsCollector
from healthreport.core.config import CRITICAL_SERVICES
from healthreport.core.results import CollectorError


def make_collector(windows=True, services=CRITICAL_SERVICES):
    collector = WindowsCollector(services=services)
    collector._is_windows = windows
    return collector


class FakeService:
    def __init__(self, name, display_name, status, start_type):
        self._info = {
            "name": name,
            "display_name": display_name,
            "status": status,
            "start_type": start_type,
        }

    def as_dict(self):
        return dict(self._info)


INSTALLED = {
    "wuauserv": FakeService("wuauserv", "Windows Update", "running", "manual"),
    "mpssvc": FakeService("mpssvc", "Windows Defender Firewall", "running", "automatic"),
    "Audiosrv": FakeService("Audiosrv", "Windows Audio", "stopped", "automatic"),
    "Dnscache": FakeService("Dnscache", "DNS Client", "start_pending", "automatic"),
}


def fake_win_service_get(name):
    if name not in INSTALLED:
        raise psutil.NoSuchProcess(pid=None, name=name, msg="service not found")
    return INSTALLED[name]


def test_services_skip_missing(monkeypatch):
    monkeypatch.setattr(psutil, "win_service_get", fake_win_service_get, raising=False)

    services = make_collector().get_services()

    assert [s.name for s in services] == ["wuauserv", "mpssvc", "Audiosrv", "Dnscache"]
    assert services[0].display_name == "Windows Update"
    assert services[0].status == "Running"
    assert services[0].is_running
    assert services[0].start_type == "Manual"
    assert services[2].status == "Stopped"
    assert not services[2].is_running
    assert services[3].status == "Start Pending"


def test_services_access_denied_is_skipped(monkeypatch, caplog):
    def restricted(name):
        if name == "WinDefend":
            raise psutil.AccessDenied(msg="access denied")
        return fake_win_service_get(name)

    monkeypatch.setattr(psutil, "win_service_get", restricted, raising=False)
    names = ["wuauserv", "WinDefend", "mpssvc"]

    with caplog.at_level("WARNING"):
        services = make_collector(services=names).get_services()

    assert [s.name for s in services] == ["wuauserv", "mpssvc"]
    assert "WinDefend" in caplog.text


def test_services_other_psutil_error_is_an_error(monkeypatch):
    def broken(name):
        raise psutil.TimeoutExpired(5)

    monkeypatch.setattr(psutil, "win_service_get", broken, raising=False)

    with pytest.raises(CollectorError, match="Could not query service wuauserv"):
        make_collector().get_services()


def test_services_without_service_manager(monkeypatch):
    monkeypatch.delattr(psutil, "win_service_get", raising=False)

    with pytest.raises(CollectorError):
        make_collector().get_services()


def test_pending_updates(monkeypatch):
    monkeypatch.setattr(windows_collector, "run_powershell", lambda command, timeout: "3")

    assert make_collector().get_pending_updates().count == 3


def test_pending_updates_zero_is_up_to_date(monkeypatch):
    monkeypatch.setattr(windows_collector, "run_powershell", lambda command, timeout: "0")

    updates = make_collector().get_pending_updates()
    assert updates.count == 0
    assert updates.up_to_date


def test_pending_updates_garbage_output(monkeypatch):
    monkeypatch.setattr(windows_collector, "run_powershell", lambda command, timeout: "")

    with pytest.raises(CollectorError):
        make_collector().get_pending_updates()


def test_pending_updates_search_failure(monkeypatch):
    def broken(command, timeout):
        raise CollectorError("PowerShell exited with code 1: 0x8024402C")

    monkeypatch.setattr(windows_collector, "run_powershell", broken)

    with pytest.raises(CollectorError, match="0x8024402C"):
        make_collector().get_pending_updates()


def test_windows_only_queries_fail_elsewhere():
    collector = make_collector(windows=False)
    with pytest.raises(CollectorError):
        collector.get_pending_updates()
    with pytest.raises(CollectorError):
        collector.get_audio_devices()


def test_audio_devices(monkeypatch):
    rows = [
        {
            "Name": "Realtek High Definition Audio",
            "Description": "Realtek High Definition Audio",
            "Availability": 3,
            "ConfigManagerErrorCode": 0,
        },
        {
            "Name": "USB Headset",
            "Description": "USB Audio Device",
            "Availability": 8,
            "ConfigManagerErrorCode": 10,
        },
        {
            "Name": "Virtual Cable",
            "Description": None,
            "Availability": None,
            "ConfigManagerErrorCode": 31,
        },
    ]
    monkeypatch.setattr(windows_collector, "powershell_json", lambda command, timeout: rows)

    realtek, headset, virtual = make_collector().get_audio_devices()

    assert realtek.status == "OK"
    assert realtek.is_ok
    assert realtek.message.endswith("This device is working properly.")
    assert headset.status == "Offline"
    assert headset.message == "The device is offline. This device cannot start."
    assert virtual.status == "Unknown"
    assert virtual.description == ""
    assert not virtual.is_ok
