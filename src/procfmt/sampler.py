"""Build procfmt entities from live system data using psutil."""

import logging
from dataclasses import dataclass
from typing import NamedTuple

import psutil

from procfmt.models import LoadAverage, MemStats

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """A live process and its memory summary."""

    pid: int
    name: str
    mem_stats: MemStats


def mem_stats_from_meminfo(mem_info: NamedTuple) -> MemStats:
    """
    Convert a psutil ``memory_info()`` result to MemStats.

    Fields psutil does not report on this platform (shared, text, data
    outside Linux) are 0.
    """
    return MemStats(
        total=mem_info.vms,
        resident=mem_info.rss,
        shared=getattr(mem_info, "shared", 0),
        text=getattr(mem_info, "text", 0),
        data=getattr(mem_info, "data", 0),
    )


def sample_system() -> tuple[LoadAverage, list[ProcessEntry]]:
    """
    Sample the system load and every accessible process in one walk.

    psutil exposes processes rather than kernel scheduling entities, so the
    task counts are process counts and the last created task is the highest
    live pid. Processes that exit mid-walk are left out of both the counts
    and the entries. Processes that deny access or are zombies still count
    as tasks but get no entry, since their memory cannot be read.
    """
    last_1min, last_5min, last_15min = psutil.getloadavg()

    entries: list[ProcessEntry] = []
    pids: list[int] = []
    runnable = 0

    for proc in psutil.process_iter(attrs=["pid", "name", "status"]):
        try:
            with proc.oneshot():
                mem_info = proc.memory_info()
            entries.append(
                ProcessEntry(
                    pid=proc.info["pid"],
                    name=proc.info.get("name") or "",
                    mem_stats=mem_stats_from_meminfo(mem_info),
                )
            )
        except (psutil.AccessDenied, psutil.ZombieProcess) as e:
            logger.debug("No memory info for pid %s: %s", proc.pid, e)
        except psutil.NoSuchProcess as e:
            logger.debug("Skipping pid %s: %s", proc.pid, e)
            continue

        pids.append(proc.pid)
        if proc.info.get("status") == psutil.STATUS_RUNNING:
            runnable += 1

    load_average = LoadAverage(
        last_1min=last_1min,
        last_5min=last_5min,
        last_15min=last_15min,
        runnable_tasks=runnable,
        total_tasks=len(pids),
        last_created_task=max(pids, default=0),
    )
    return load_average, entries
