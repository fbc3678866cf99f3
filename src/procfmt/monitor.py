"""Background entity sampling for procfmt."""

import logging
import threading
from dataclasses import dataclass
from queue import Queue

from procfmt.formatters import format_load_average
from procfmt.models import LoadAverage
from procfmt.sampler import ProcessEntry, sample_system

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EntitySnapshot:
    """Entities sampled in one poll."""

    load_average: LoadAverage
    processes: list[ProcessEntry]


class EntityMonitor:
    """
    Entity monitor that samples system state using psutil.

    Runs in a separate daemon thread and pushes updates to a thread-safe Queue.
    Each sampled load average is logged at DEBUG level in its formatted form.
    """

    def __init__(
        self,
        update_queue: Queue[EntitySnapshot],
        poll_rate: float = 2.0,
    ) -> None:
        """
        Initialize the EntityMonitor.

        Args:
            update_queue: Thread-safe queue to push updates to.
            poll_rate: How often to poll the system (in seconds). Default 2.0s.
        """
        self._queue = update_queue
        self._poll_rate = max(0.1, poll_rate)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="EntityMonitor",
        )
        self._thread.start()
        logger.info("Entity monitor started (poll rate %.1fs)", self._poll_rate)

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
            logger.info("Entity monitor stopped")

    def _poll_loop(self) -> None:
        """Main polling loop running in the background thread."""
        while not self._stop_event.is_set():
            try:
                snapshot = self.collect_snapshot()
                self._queue.put(snapshot)
            except Exception:
                # Keep the loop running; the next poll may succeed
                logger.exception("Entity poll failed")

            # Wait for poll_rate seconds or until stop is requested
            self._stop_event.wait(timeout=self._poll_rate)

    def collect_snapshot(self) -> EntitySnapshot:
        """Sample the current system state."""
        load_average, processes = sample_system()
        logger.debug("%s", format_load_average(load_average))

        return EntitySnapshot(load_average=load_average, processes=processes)
