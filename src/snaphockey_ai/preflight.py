"""Network preflight — a non-blocking cellular advisory before upload.

The notice is purely informational: it is scheduled as a background task and
the analysis proceeds immediately whatever the connection type.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RECHECK_DELAY_SECONDS = 0.3


class InterfaceType(str, Enum):
    WIFI = "wifi"
    CELLULAR = "cellular"
    WIRED = "wired"
    UNKNOWN = "unknown"


class ConnectivityStatus(BaseModel):
    interface: InterfaceType = InterfaceType.UNKNOWN
    is_expensive: bool = False
    is_constrained: bool = False

    @property
    def warrants_notice(self) -> bool:
        return self.interface is InterfaceType.CELLULAR or self.is_expensive or self.is_constrained


class Connectivity:
    """Latest known network path, fed by whatever monitors the host network.

    ``current`` is None until the first update arrives.
    """

    def __init__(self, status: ConnectivityStatus | None = None) -> None:
        self._status = status

    def update(self, status: ConnectivityStatus) -> None:
        self._status = status

    @property
    def current(self) -> ConnectivityStatus | None:
        return self._status

    @property
    def network_type(self) -> str:
        return self._status.interface.value if self._status else InterfaceType.UNKNOWN.value


NoticeHook = Callable[[ConnectivityStatus], Awaitable[None] | None]


class CellularNotice:
    """Fires *hook* at most once per ``show_if_needed`` call on metered links."""

    def __init__(
        self,
        connectivity: Connectivity,
        hook: NoticeHook | None = None,
        *,
        recheck_delay: float = RECHECK_DELAY_SECONDS,
    ) -> None:
        self.connectivity = connectivity
        self.hook = hook
        self.recheck_delay = recheck_delay
        self._pending: set[asyncio.Task] = set()

    def show_if_needed(self) -> asyncio.Task | None:
        """Schedule the check and return immediately."""
        if self.hook is None:
            return None
        task = asyncio.get_running_loop().create_task(self._check())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _check(self) -> bool:
        status = self.connectivity.current
        if status is None:
            await asyncio.sleep(self.recheck_delay)
            status = self.connectivity.current
        if status is None or not status.warrants_notice:
            return False
        try:
            outcome = self.hook(status)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            logger.warning("Cellular notice hook failed", exc_info=True)
        return True
