"""Display labels for the kernel enumerations in procfmt.models.

Every table is keyed by enum member. The members mix in ``int`` or ``str``,
so a raw kernel value (``1``, ``"R"``) finds the same entry as the member.
Anything not in a table resolves to ``UNKNOWN``.
"""

from collections.abc import Mapping
from enum import Enum

from procfmt.models import (
    ModuleState,
    SeccompMode,
    SocketState,
    SocketTimer,
    TaskState,
    UnixSocketState,
    UnixSocketType,
)

UNKNOWN = "Unknown"

SOCKET_TIMER_LABELS: Mapping[Enum, str] = {
    SocketTimer.NONE: "None",
    SocketTimer.RETRANSMIT: "Retransmit",
    SocketTimer.ANOTHER: "Another",
    SocketTimer.TIME_WAIT: "Time-Wait",
    SocketTimer.ZERO_WINDOW: "Zero-Window",
}

SOCKET_STATE_LABELS: Mapping[Enum, str] = {
    SocketState.ESTABLISHED: "Established",
    SocketState.SYN_SENT: "Syn-Sent",
    SocketState.SYN_RECV: "Syn-Recv",
    SocketState.FIN_WAIT1: "Fin-Wait1",
    SocketState.FIN_WAIT2: "Fin-Wait2",
    SocketState.TIME_WAIT: "Time-Wait",
    SocketState.CLOSE: "Close",
    SocketState.CLOSE_WAIT: "Close-Wait",
    SocketState.LAST_ACK: "Last-Ack",
    SocketState.LISTEN: "Listen",
    SocketState.CLOSING: "Closing",
}

UNIX_SOCKET_TYPE_LABELS: Mapping[Enum, str] = {
    UnixSocketType.STREAM: "Stream",
    UnixSocketType.DATAGRAM: "Datagram",
    UnixSocketType.SEQPACKET: "SeqPacket",
}

UNIX_SOCKET_STATE_LABELS: Mapping[Enum, str] = {
    UnixSocketState.FREE: "Free",
    UnixSocketState.UNCONNECTED: "Unconnected",
    UnixSocketState.CONNECTING: "Connecting",
    UnixSocketState.CONNECTED: "Connected",
    UnixSocketState.DISCONNECTING: "Disconnecting",
}

TASK_STATE_LABELS: Mapping[Enum, str] = {
    TaskState.RUNNING: "Running",
    TaskState.SLEEPING: "Sleeping",
    TaskState.DISK_SLEEP: "Disk-Sleep",
    TaskState.STOPPED: "Stopped",
    TaskState.TRACING_STOP: "Tracing-Stop",
    TaskState.ZOMBIE: "Zombie",
    TaskState.DEAD: "Dead",
    TaskState.WAKEKILL: "Wake-Kill",
    TaskState.WAKING: "Waking",
    TaskState.PARKED: "Parked",
    TaskState.IDLE: "Idle",
}

SECCOMP_LABELS: Mapping[Enum, str] = {
    SeccompMode.DISABLED: "Disabled",
    SeccompMode.STRICT: "Strict",
    SeccompMode.FILTER: "Filter",
}

MODULE_STATE_LABELS: Mapping[Enum, str] = {
    ModuleState.LIVE: "Live",
    ModuleState.LOADING: "Loading",
    ModuleState.UNLOADING: "Unloading",
}


def resolve_label(table: Mapping[Enum, str], value: object) -> str:
    """
    Look up the display label of an enumerated value.

    Never raises: values missing from the table, including unhashable
    ones, resolve to ``UNKNOWN``. Booleans are never kernel values, so
    ``True`` does not alias the member numbered 1.
    """
    if isinstance(value, bool):
        return UNKNOWN
    try:
        return table.get(value, UNKNOWN)  # type: ignore[call-overload]
    except TypeError:
        return UNKNOWN


def socket_timer_label(value: SocketTimer | int) -> str:
    return resolve_label(SOCKET_TIMER_LABELS, value)


def socket_state_label(value: SocketState | int) -> str:
    return resolve_label(SOCKET_STATE_LABELS, value)


def unix_socket_type_label(value: UnixSocketType | int) -> str:
    return resolve_label(UNIX_SOCKET_TYPE_LABELS, value)


def unix_socket_state_label(value: UnixSocketState | int) -> str:
    return resolve_label(UNIX_SOCKET_STATE_LABELS, value)


def task_state_label(value: TaskState | str) -> str:
    return resolve_label(TASK_STATE_LABELS, value)


def seccomp_label(value: SeccompMode | int) -> str:
    return resolve_label(SECCOMP_LABELS, value)


def module_state_label(value: ModuleState | int) -> str:
    return resolve_label(MODULE_STATE_LABELS, value)
