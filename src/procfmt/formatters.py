"""Human-readable formatting of procfmt entities.

Each formatter renders one entity as ``label[value]`` segments separated by
single spaces, in a fixed field order. The output is meant for logs and
debugging, not for parsing.
"""

from collections.abc import Iterable
from dataclasses import fields
from functools import singledispatch

from procfmt.labels import (
    module_state_label,
    seccomp_label,
    socket_state_label,
    socket_timer_label,
    task_state_label,
    unix_socket_state_label,
    unix_socket_type_label,
)
from procfmt.models import (
    LoadAverage,
    MemPerm,
    MemRegion,
    MemStats,
    Module,
    Mount,
    Socket,
    Stat,
    Status,
    UidSet,
    UnixDomainSocket,
    Zone,
)
from procfmt.render import join, render_address, render_bool, render_hex, render_octal

# Stat fields holding user or kernel addresses.
_STAT_ADDRESS_FIELDS = frozenset(
    {
        "startcode",
        "endcode",
        "startstack",
        "kstkesp",
        "kstkeip",
        "wchan",
        "start_data",
        "end_data",
        "start_brk",
        "arg_start",
        "arg_end",
        "env_start",
        "env_end",
    }
)


def _segments(pairs: Iterable[tuple[str, object]]) -> str:
    return " ".join(f"{label}[{value}]" for label, value in pairs)


def _load(value: float) -> str:
    return f"{value:g}"


def format_socket(socket: Socket) -> str:
    """Format a TCP/UDP socket."""
    return _segments(
        [
            ("slot", socket.slot),
            ("local", f"{socket.local_ip}:{socket.local_port}"),
            ("remote", f"{socket.remote_ip}:{socket.remote_port}"),
            ("state", socket_state_label(socket.current_state)),
            ("tx_queue", socket.tx_queue),
            ("rx_queue", socket.rx_queue),
            ("timer", socket_timer_label(socket.timer_active)),
            ("timer_expire", socket.timer_expire_jiffies),
            ("retransmits", socket.retransmits),
            ("uid", socket.uid),
            ("timeouts", socket.timeouts),
            ("inode", socket.inode),
            ("ref_count", socket.ref_count),
            ("skbuff", render_address(socket.skbuff)),
        ]
    )


def format_unix_domain_socket(uds: UnixDomainSocket) -> str:
    """Format an AF_UNIX socket."""
    return _segments(
        [
            ("skbuff", render_address(uds.skbuff)),
            ("ref_count", uds.ref_count),
            ("protocol", uds.protocol),
            ("flags", uds.flags),
            ("type", unix_socket_type_label(uds.socket_type)),
            ("state", unix_socket_state_label(uds.socket_state)),
            ("inode", uds.inode),
            ("path", uds.path),
        ]
    )


def format_uid_set(uid_set: UidSet) -> str:
    """Format as ``real,effective,saved_set,filesystem``."""
    return join((uid_set.real, uid_set.effective, uid_set.saved_set, uid_set.filesystem))


def format_status(status: Status) -> str:
    """
    Format a process status.

    Umask renders as 4-digit octal, signal and capability masks as
    16-digit hex, and the uid/gid sets through format_uid_set.
    """
    queued, limit = status.sig_q
    return _segments(
        [
            ("name", status.name),
            ("umask", render_octal(status.umask)),
            ("state", task_state_label(status.state)),
            ("tgid", status.tgid),
            ("ngid", status.ngid),
            ("pid", status.pid),
            ("ppid", status.ppid),
            ("tracer_pid", status.tracer_pid),
            ("uid", format_uid_set(status.uid)),
            ("gid", format_uid_set(status.gid)),
            ("fdsize", status.fd_size),
            ("groups", join(status.groups)),
            ("ns_tgid", join(status.ns_tgid)),
            ("ns_pid", join(status.ns_pid)),
            ("ns_pgid", join(status.ns_pgid)),
            ("ns_sid", join(status.ns_sid)),
            ("vm_peak", status.vm_peak),
            ("vm_size", status.vm_size),
            ("vm_lck", status.vm_lck),
            ("vm_pin", status.vm_pin),
            ("vm_hwm", status.vm_hwm),
            ("vm_rss", status.vm_rss),
            ("rss_anon", status.rss_anon),
            ("rss_file", status.rss_file),
            ("rss_shmem", status.rss_shmem),
            ("vm_data", status.vm_data),
            ("vm_stk", status.vm_stk),
            ("vm_exe", status.vm_exe),
            ("vm_lib", status.vm_lib),
            ("vm_pte", status.vm_pte),
            ("vm_swap", status.vm_swap),
            ("huge_tlb_pages", status.huge_tlb_pages),
            ("core_dumping", render_bool(status.core_dumping)),
            ("threads", status.threads),
            ("sig_q", f"{queued}/{limit}"),
            ("sig_pnd", render_hex(status.sig_pnd)),
            ("shd_pnd", render_hex(status.shd_pnd)),
            ("sig_blk", render_hex(status.sig_blk)),
            ("sig_ign", render_hex(status.sig_ign)),
            ("sig_cgt", render_hex(status.sig_cgt)),
            ("cap_inh", render_hex(status.cap_inh)),
            ("cap_prm", render_hex(status.cap_prm)),
            ("cap_eff", render_hex(status.cap_eff)),
            ("cap_bnd", render_hex(status.cap_bnd)),
            ("cap_amb", render_hex(status.cap_amb)),
            ("no_new_privs", render_bool(status.no_new_privs)),
            ("seccomp", seccomp_label(status.seccomp_mode)),
            ("voluntary_ctxt_switches", status.voluntary_ctxt_switches),
            ("nonvoluntary_ctxt_switches", status.nonvoluntary_ctxt_switches),
        ]
    )


def _stat_value(name: str, value: object) -> object:
    if name == "state":
        return task_state_label(value)  # type: ignore[arg-type]
    if name in _STAT_ADDRESS_FIELDS:
        return render_address(value)  # type: ignore[arg-type]
    return value


def format_stat(stat: Stat) -> str:
    """Format a raw stat record; every field is labeled by its own name."""
    return _segments(
        (f.name, _stat_value(f.name, getattr(stat, f.name))) for f in fields(stat)
    )


def format_mem_stats(mem: MemStats) -> str:
    return _segments(
        [
            ("total", mem.total),
            ("resident", mem.resident),
            ("shared", mem.shared),
            ("text", mem.text),
            ("data", mem.data),
        ]
    )


def format_mem_perm(perm: MemPerm) -> str:
    """Format as the four-letter maps permission field, e.g. ``r-xp``."""
    return (
        ("r" if perm.can_read else "-")
        + ("w" if perm.can_write else "-")
        + ("x" if perm.can_execute else "-")
        + ("s" if perm.is_shared else "p")
    )


def format_mem_region(region: MemRegion) -> str:
    """Format a mapped region."""
    address_range = (
        f"addr[{render_address(region.start_address)}]-"
        f"[{render_address(region.end_address)}]"
    )
    return " ".join(
        [
            address_range,
            _segments(
                [
                    ("perm", format_mem_perm(region.perm)),
                    ("offset", render_address(region.offset)),
                    ("device", region.device),
                    ("inode", region.inode),
                    ("pathname", region.pathname),
                ]
            ),
        ]
    )


def format_mount(mount: Mount) -> str:
    return _segments(
        [
            ("id", mount.id),
            ("parent_id", mount.parent_id),
            ("device", mount.device),
            ("root", mount.root),
            ("point", mount.point),
            ("options", join(mount.options)),
            ("optional", join(mount.optional)),
            ("fs", mount.filesystem_type),
            ("source", mount.source),
            ("super_options", join(mount.super_options)),
        ]
    )


def format_module(module: Module) -> str:
    """Format a loaded kernel module."""
    return _segments(
        [
            ("name", module.name),
            ("size", module.size),
            ("instances", module.instances),
            ("dependencies", join(module.dependencies)),
            ("state", module_state_label(module.current_state)),
            ("offset", render_address(module.offset)),
            ("out_of_tree", render_bool(module.is_out_of_tree)),
            ("unsigned", render_bool(module.is_unsigned)),
        ]
    )


def format_load_average(load: LoadAverage) -> str:
    """Format a load snapshot, e.g. ``load[0.5, 0.3, 0.1] runnable_tasks[3] ...``."""
    averages = ", ".join(_load(v) for v in (load.last_1min, load.last_5min, load.last_15min))
    return _segments(
        [
            ("load", averages),
            ("runnable_tasks", load.runnable_tasks),
            ("total_tasks", load.total_tasks),
            ("last_created_task", load.last_created_task),
        ]
    )


def format_zone(zone: Zone) -> str:
    return _segments([("zone", zone.name), ("chunks", join(zone.chunks))])


@singledispatch
def format_entity(entity: object) -> str:
    """
    Format any procfmt entity with its own formatter.

    Raises:
        TypeError: If ``entity`` is not a procfmt entity.
    """
    raise TypeError(f"cannot format {type(entity).__name__!r}")


format_entity.register(Socket, format_socket)
format_entity.register(UnixDomainSocket, format_unix_domain_socket)
format_entity.register(UidSet, format_uid_set)
format_entity.register(Status, format_status)
format_entity.register(Stat, format_stat)
format_entity.register(MemStats, format_mem_stats)
format_entity.register(MemPerm, format_mem_perm)
format_entity.register(MemRegion, format_mem_region)
format_entity.register(Mount, format_mount)
format_entity.register(Module, format_module)
format_entity.register(LoadAverage, format_load_average)
format_entity.register(Zone, format_zone)
