"""Tests for the EntityMonitor class."""

import logging
from queue import Queue

from procfmt import monitor as monitor_module
from procfmt.models import LoadAverage, MemStats
from procfmt.monitor import EntityMonitor, EntitySnapshot
from procfmt.sampler import ProcessEntry


def make_load_average() -> LoadAverage:
    return LoadAverage(
        last_1min=1.0,
        last_5min=0.5,
        last_15min=0.25,
        runnable_tasks=2,
        total_tasks=10,
        last_created_task=999,
    )


class TestEntitySnapshot:
    """Tests for EntitySnapshot dataclass."""

    def test_entity_snapshot_creation(self):
        """Test EntitySnapshot can be created with all fields."""
        entry = ProcessEntry(pid=1, name="init", mem_stats=MemStats(1, 2, 3, 4, 5))
        snapshot = EntitySnapshot(load_average=make_load_average(), processes=[entry])

        assert snapshot.load_average.total_tasks == 10
        assert snapshot.processes == [entry]

    def test_entity_snapshot_uses_slots(self):
        """Test EntitySnapshot uses __slots__ for memory efficiency."""
        snapshot = EntitySnapshot(load_average=make_load_average(), processes=[])
        # Slots-based dataclasses don't have __dict__
        assert not hasattr(snapshot, "__dict__")


class TestEntityMonitor:
    """Tests for EntityMonitor class."""

    def test_monitor_creation(self):
        """Test EntityMonitor can be instantiated."""
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue)

        assert monitor.poll_rate == 2.0
        assert not monitor.is_running

    def test_poll_rate_minimum(self):
        """Test poll rate has a minimum value."""
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue, poll_rate=0.0)
        assert monitor.poll_rate == 0.1

        monitor.poll_rate = 0.01
        assert monitor.poll_rate == 0.1

    def test_monitor_start_stop(self):
        """Test EntityMonitor can be started and stopped."""
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue, poll_rate=0.1)

        monitor.start()
        assert monitor.is_running

        monitor.stop()
        assert not monitor.is_running

    def test_monitor_start_idempotent(self):
        """Test starting an already running monitor is safe."""
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue, poll_rate=0.1)

        monitor.start()
        thread1 = monitor._thread

        monitor.start()  # Should not create a new thread
        thread2 = monitor._thread

        assert thread1 is thread2
        monitor.stop()

    def test_daemon_thread(self):
        """Test monitor thread is a daemon thread."""
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue, poll_rate=0.1)

        monitor.start()

        try:
            assert monitor._thread is not None
            assert monitor._thread.daemon is True
            assert monitor._thread.name == "EntityMonitor"
        finally:
            monitor.stop()

    def test_monitor_collects_data(self):
        """Test EntityMonitor samples and queues entities."""
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue, poll_rate=0.1)

        monitor.start()

        try:
            snapshot = queue.get(timeout=5.0)
            assert isinstance(snapshot, EntitySnapshot)
            assert isinstance(snapshot.load_average, LoadAverage)
            assert len(snapshot.processes) > 0
            for proc in snapshot.processes:
                assert isinstance(proc, ProcessEntry)
                assert isinstance(proc.mem_stats, MemStats)
        finally:
            monitor.stop()

    def test_collect_snapshot_logs_formatted_load(self, caplog):
        """Test each sample logs the formatted load average at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="procfmt.monitor")
        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue)

        monitor.collect_snapshot()

        assert "runnable_tasks[" in caplog.text
        assert "last_created_task[" in caplog.text

    def test_monitor_survives_failed_poll(self, monkeypatch, caplog):
        """Test the loop logs a failed poll and keeps running."""
        calls = {"count": 0}

        def flaky_system() -> tuple[LoadAverage, list[ProcessEntry]]:
            calls["count"] += 1
            if calls["count"] == 1:
                raise RuntimeError("simulated sampling failure")
            return make_load_average(), []

        monkeypatch.setattr(monitor_module, "sample_system", flaky_system)

        queue: Queue[EntitySnapshot] = Queue()
        monitor = EntityMonitor(queue, poll_rate=0.1)

        monitor.start()

        try:
            snapshot = queue.get(timeout=5.0)
            assert snapshot.load_average == make_load_average()
            assert monitor.is_running
        finally:
            monitor.stop()

        assert "Entity poll failed" in caplog.text
        assert "simulated sampling failure" in caplog.text
