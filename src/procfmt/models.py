"""Data models for procfmt.

Immutable value records describing kernel-exposed process and system state.
They are populated by a parser or sampler and only read by the formatters.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from ipaddress import IPv4Address, IPv6Address


class SocketTimer(IntEnum):
    """Timer kind of a TCP/UDP socket (``tr`` column of /proc/net/tcp)."""

    NONE = 0
    RETRANSMIT = 1
    ANOTHER = 2
    TIME_WAIT = 3
    ZERO_WINDOW = 4


class SocketState(IntEnum):
    """TCP connection state, numbered as in include/net/tcp_states.h."""

    ESTABLISHED = 1
    SYN_SENT = 2
    SYN_RECV = 3
    FIN_WAIT1 = 4
    FIN_WAIT2 = 5
    TIME_WAIT = 6
    CLOSE = 7
    CLOSE_WAIT = 8
    LAST_ACK = 9
    LISTEN = 10
    CLOSING = 11


class UnixSocketType(IntEnum):
    """AF_UNIX socket type."""

    STREAM = 1
    DATAGRAM = 2
    SEQPACKET = 5


class UnixSocketState(IntEnum):
    """AF_UNIX socket state."""

    FREE = 0
    UNCONNECTED = 1
    CONNECTING = 2
    CONNECTED = 3
    DISCONNECTING = 4


class TaskState(str, Enum):
    """Task state letter as shown in /proc/[pid]/stat and status."""

    RUNNING = "R"
    SLEEPING = "S"
    DISK_SLEEP = "D"
    STOPPED = "T"
    TRACING_STOP = "t"
    ZOMBIE = "Z"
    DEAD = "X"
    WAKEKILL = "K"
    WAKING = "W"
    PARKED = "P"
    IDLE = "I"


class SeccompMode(IntEnum):
    """Seccomp mode of a process."""

    DISABLED = 0
    STRICT = 1
    FILTER = 2


class ModuleState(IntEnum):
    """Load state of a kernel module."""

    LIVE = 0
    LOADING = 1
    UNLOADING = 2


IPAddress = IPv4Address | IPv6Address


@dataclass(slots=True, frozen=True)
class Socket:
    """One IPv4/IPv6 TCP or UDP socket."""

    slot: int
    local_ip: IPAddress
    local_port: int
    remote_ip: IPAddress
    remote_port: int
    current_state: SocketState | int
    tx_queue: int
    rx_queue: int
    timer_active: SocketTimer | int
    timer_expire_jiffies: int
    retransmits: int
    uid: int
    timeouts: int
    inode: int
    ref_count: int
    skbuff: int  # Kernel address


@dataclass(slots=True, frozen=True)
class UnixDomainSocket:
    """One AF_UNIX socket."""

    skbuff: int  # Kernel address
    ref_count: int
    protocol: int
    flags: int
    socket_type: UnixSocketType | int
    socket_state: UnixSocketState | int
    inode: int
    path: str


@dataclass(slots=True, frozen=True)
class UidSet:
    """Real, effective, saved-set and filesystem ids."""

    real: int
    effective: int
    saved_set: int
    filesystem: int


@dataclass(slots=True, frozen=True)
class Status:
    """Aggregated process status, as in /proc/[pid]/status."""

    name: str
    umask: int
    state: TaskState | str
    tgid: int
    ngid: int
    pid: int
    ppid: int
    tracer_pid: int
    uid: UidSet
    gid: UidSet
    fd_size: int
    groups: tuple[int, ...]
    ns_tgid: tuple[int, ...]
    ns_pid: tuple[int, ...]
    ns_pgid: tuple[int, ...]
    ns_sid: tuple[int, ...]
    vm_peak: int  # KiB
    vm_size: int
    vm_lck: int
    vm_pin: int
    vm_hwm: int
    vm_rss: int
    rss_anon: int
    rss_file: int
    rss_shmem: int
    vm_data: int
    vm_stk: int
    vm_exe: int
    vm_lib: int
    vm_pte: int
    vm_swap: int
    huge_tlb_pages: int
    core_dumping: bool
    threads: int
    sig_q: tuple[int, int]  # (queued, limit)
    sig_pnd: int
    shd_pnd: int
    sig_blk: int
    sig_ign: int
    sig_cgt: int
    cap_inh: int
    cap_prm: int
    cap_eff: int
    cap_bnd: int
    cap_amb: int
    no_new_privs: bool
    seccomp_mode: SeccompMode | int
    voluntary_ctxt_switches: int
    nonvoluntary_ctxt_switches: int


@dataclass(slots=True, frozen=True)
class Stat:
    """Raw accounting record, as in /proc/[pid]/stat."""

    pid: int
    comm: str
    state: TaskState | str
    ppid: int
    pgrp: int
    session: int
    tty_nr: int
    tgpid: int
    flags: int
    minflt: int
    cminflt: int
    majflt: int
    cmajflt: int
    utime: int
    stime: int
    cutime: int
    cstime: int
    priority: int
    nice: int
    num_threads: int
    itrealvalue: int
    starttime: int
    vsize: int
    rss: int
    rsslim: int
    startcode: int
    endcode: int
    startstack: int
    kstkesp: int
    kstkeip: int
    signal: int
    blocked: int
    sigignore: int
    sigcatch: int
    wchan: int
    nswap: int
    cnswap: int
    exit_signal: int
    processor: int
    rt_priority: int
    policy: int
    delayacct_blkio_ticks: int
    guest_time: int
    cguest_time: int
    start_data: int
    end_data: int
    start_brk: int
    arg_start: int
    arg_end: int
    env_start: int
    env_end: int
    exit_code: int


@dataclass(slots=True, frozen=True)
class MemStats:
    """Memory usage summary of a process, in bytes."""

    total: int
    resident: int
    shared: int
    text: int
    data: int


@dataclass(slots=True, frozen=True)
class MemPerm:
    """Permission bits of a mapped region."""

    can_read: bool
    can_write: bool
    can_execute: bool
    is_shared: bool


@dataclass(slots=True, frozen=True)
class MemRegion:
    """One mapped virtual memory region, as in /proc/[pid]/maps."""

    start_address: int
    end_address: int
    perm: MemPerm
    offset: int
    device: int
    inode: int
    pathname: str


@dataclass(slots=True, frozen=True)
class Mount:
    """One mount table entry, as in /proc/[pid]/mountinfo."""

    id: int
    parent_id: int
    device: int
    root: str
    point: str
    options: tuple[str, ...]
    optional: tuple[str, ...]
    filesystem_type: str
    source: str
    super_options: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class Module:
    """One loaded kernel module, as in /proc/modules."""

    name: str
    size: int
    instances: int
    dependencies: tuple[str, ...]
    current_state: ModuleState | int
    offset: int  # Load address
    is_out_of_tree: bool
    is_unsigned: bool


@dataclass(slots=True, frozen=True)
class LoadAverage:
    """System load snapshot, as in /proc/loadavg."""

    last_1min: float
    last_5min: float
    last_15min: float
    runnable_tasks: int
    total_tasks: int
    last_created_task: int


@dataclass(slots=True, frozen=True)
class Zone:
    """One memory zone and its free chunk counts per order."""

    name: str
    chunks: tuple[int, ...]
