"""Self-rescheduling poll loops. One asyncio task per loop, no shared state."""

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

CONTACT_POLL_INTERVAL = 2.0
TIME_POLL_INTERVAL = 1.0

Sleep = Callable[[float], Awaitable[object]]


class LoopState(enum.Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


class PollLoop:
    """Runs tick -> wait interval -> tick ... with no terminal state.

    The next tick is scheduled only after the current one has been fully
    handled. A failing tick is logged and the loop carries on.
    """

    def __init__(
        self,
        name: str,
        tick: Callable[[], Awaitable[object]],
        interval: float,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive.")
        self.name = name
        self.interval = interval
        self.state = LoopState.IDLE
        self.ticks = 0
        self._tick = tick
        self._sleep = sleep

    async def tick_once(self) -> None:
        self.state = LoopState.AWAITING_RESPONSE
        try:
            await self._tick()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Poll loop %s: tick failed", self.name)
        finally:
            self.state = LoopState.IDLE
            self.ticks += 1

    async def run(self, max_ticks: int | None = None) -> None:
        """Tick immediately, then every interval. max_ticks=None runs forever."""
        logger.debug("Poll loop %s started (every %.1fs)", self.name, self.interval)
        while max_ticks is None or self.ticks < max_ticks:
            await self.tick_once()
            if max_ticks is not None and self.ticks >= max_ticks:
                break
            await self._sleep(self.interval)

    def start(self, max_ticks: int | None = None) -> asyncio.Task:
        """Schedule the loop on the running event loop."""
        return asyncio.get_running_loop().create_task(
            self.run(max_ticks), name=f"poll-{self.name}"
        )
