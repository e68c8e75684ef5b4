import logging
import threading
from typing import Callable, Optional

from .conf import notification_setting
from .engine import TriggerEngine, build_engine, run_scan_now

logger = logging.getLogger(__name__)


class ScanScheduler:
    """
    Runs a trigger scan as soon as it starts, then once per interval until
    stopped. Failures are logged and the next tick runs regardless.
    """

    def __init__(
        self,
        engine_factory: Callable[[], TriggerEngine] = build_engine,
        interval_seconds: Optional[float] = None,
    ):
        self.engine_factory = engine_factory
        self.interval = interval_seconds or notification_setting("SCAN_INTERVAL_SECONDS")
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, daemon: bool = True) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="trigger-scan-scheduler", daemon=daemon)
        self._thread.start()
        logger.info("Notification scheduler started (every %s seconds)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
        logger.info("Notification scheduler stopped")

    def wait(self) -> None:
        while self.running:
            self._thread.join(1.0)

    def run_once(self):
        try:
            ok, report = run_scan_now(self.engine_factory())
        except Exception:
            logger.exception("Scheduled trigger scan failed")
            ok, report = False, None
        self.runs += 1
        return ok, report

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.run_once()
            self._stop.wait(self.interval)
