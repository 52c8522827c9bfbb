import asyncio
from typing import Callable, Optional

from tiketloka.core.config import COUNTDOWN_INTERVAL, PAYMENT_COUNTDOWN_SECONDS
from tiketloka.core.logging_config import get_logger

logger = get_logger("payment")


def format_countdown(seconds: int) -> str:
    seconds = max(int(seconds), 0)
    minutes, rest = divmod(seconds, 60)
    return f"{minutes}:{rest:02d}"


class PaymentCountdown:
    """
    Urgency timer shown while a booking waits for payment.

    Reaching zero only stops the ticking; the booking stays pending until
    someone confirms or cancels it.
    """

    def __init__(
        self,
        duration: int = PAYMENT_COUNTDOWN_SECONDS,
        interval: float = COUNTDOWN_INTERVAL,
        on_tick: Optional[Callable[[int], None]] = None,
    ):
        self.duration = max(int(duration), 0)
        self.remaining = self.duration
        self.interval = interval
        self._on_tick = on_tick
        self._task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def elapsed(self) -> bool:
        return self.remaining == 0

    @property
    def display(self) -> str:
        return format_countdown(self.remaining)

    def tick(self) -> int:
        if self._stopped or self.remaining <= 0:
            return self.remaining

        self.remaining -= 1
        if self._on_tick is not None:
            try:
                self._on_tick(self.remaining)
            except Exception:
                # callback errors are logged, ticking continues
                logger.exception(f"Countdown tick callback failed at {self.remaining}s")
        return self.remaining

    async def _run(self):
        while self.remaining > 0 and not self._stopped:
            await asyncio.sleep(self.interval)
            self.tick()

        if self.remaining == 0:
            logger.info("Payment countdown reached zero")

    def start(self) -> asyncio.Task:
        """Schedule the ticking on the running event loop."""
        if self._stopped:
            raise RuntimeError("Countdown was cancelled and cannot be restarted")
        if self.running:
            return self._task

        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    def cancel(self):
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self):
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.cancel()
        return False
