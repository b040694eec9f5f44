"""
Deferred callback schedulers used by the order status simulation
"""
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledCall:
    # Handle returned by call_later; cancel() prevents a pending callback from running

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False
        self._timer = None

    def cancel(self):
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()


class ThreadingScheduler:
    # Real-time scheduler backed by daemon threading.Timer threads

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(delay, callback)
        timer = threading.Timer(delay, self._run, args=(call,))
        timer.daemon = True
        call._timer = timer
        timer.start()
        return call

    @staticmethod
    def _run(call: ScheduledCall):
        if call.cancelled:
            return
        try:
            call.callback()
        except Exception:
            # Nobody awaits a timer thread; keep the failure visible
            logger.exception("Scheduled callback failed")
