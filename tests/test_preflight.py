"""Tests for the cellular preflight notice."""

from __future__ import annotations

from unittest.mock import AsyncMock

from snaphockey_ai.preflight import (
    CellularNotice,
    Connectivity,
    ConnectivityStatus,
    InterfaceType,
)

CELLULAR = ConnectivityStatus(interface=InterfaceType.CELLULAR)
WIFI = ConnectivityStatus(interface=InterfaceType.WIFI)


class RecordingHook:
    def __init__(self) -> None:
        self.calls: list[ConnectivityStatus] = []

    def __call__(self, status: ConnectivityStatus) -> None:
        self.calls.append(status)


class TestConnectivityStatus:
    def test_warrants_notice(self):
        assert CELLULAR.warrants_notice
        assert not WIFI.warrants_notice
        assert ConnectivityStatus(interface=InterfaceType.WIFI, is_expensive=True).warrants_notice
        assert ConnectivityStatus(is_constrained=True).warrants_notice

    def test_network_type(self):
        connectivity = Connectivity()
        assert connectivity.current is None
        assert connectivity.network_type == "unknown"
        connectivity.update(WIFI)
        assert connectivity.network_type == "wifi"


class TestCellularNotice:
    async def test_no_hook_schedules_nothing(self):
        assert CellularNotice(Connectivity(CELLULAR)).show_if_needed() is None

    async def test_cellular_fires_hook(self):
        hook = RecordingHook()
        task = CellularNotice(Connectivity(CELLULAR), hook).show_if_needed()
        assert await task is True
        assert hook.calls == [CELLULAR]

    async def test_async_hook_awaited(self):
        hook = AsyncMock()
        task = CellularNotice(Connectivity(CELLULAR), hook).show_if_needed()
        assert await task is True
        hook.assert_awaited_once_with(CELLULAR)

    async def test_wifi_skips_hook(self):
        hook = RecordingHook()
        assert await CellularNotice(Connectivity(WIFI), hook).show_if_needed() is False
        assert hook.calls == []

    async def test_rechecks_once_when_unknown(self):
        hook = RecordingHook()
        connectivity = Connectivity()
        task = CellularNotice(connectivity, hook, recheck_delay=0.01).show_if_needed()
        connectivity.update(CELLULAR)
        assert await task is True
        assert hook.calls == [CELLULAR]

    async def test_still_unknown_after_recheck(self):
        hook = RecordingHook()
        notice = CellularNotice(Connectivity(), hook, recheck_delay=0.01)
        assert await notice.show_if_needed() is False
        assert hook.calls == []

    async def test_hook_failure_is_logged_not_raised(self, caplog):
        def hook(status):
            raise RuntimeError("ui gone")

        task = CellularNotice(Connectivity(CELLULAR), hook).show_if_needed()
        assert await task is True
        assert "Cellular notice hook failed" in caplog.text
