"""Rendering primitives shared by the entity formatters."""

from collections.abc import Iterable

PRINTABLE_MIN = 0x21
PRINTABLE_MAX = 0x7E


def render_octal(mask: int, width: int = 4) -> str:
    """Render a mask in octal, zero-padded to at least ``width`` digits."""
    return f"{mask:0{width}o}"


def render_hex(mask: int, width: int = 16) -> str:
    """Render a mask in lowercase hex, zero-padded to at least ``width`` digits."""
    return f"{mask:0{width}x}"


def render_address(address: int) -> str:
    """Render an address or offset as unpadded ``0x`` hex."""
    return f"0x{address:x}"


def render_bool(flag: bool) -> str:
    return "true" if flag else "false"


def join(values: Iterable[object]) -> str:
    """Join the string forms of ``values`` with commas, keeping order and repeats."""
    return ",".join(str(value) for value in values)


def is_printable(byte: int) -> bool:
    return PRINTABLE_MIN <= byte <= PRINTABLE_MAX


def render_printable(buffer: bytes | bytearray | memoryview | Iterable[int] | str) -> str:
    """
    Render a raw buffer for log output.

    Bytes in 0x21-0x7e are kept, every other byte becomes ``.``. The output
    has one character per input byte. A ``str`` is filtered by code point,
    so feeding the result back in returns it unchanged.
    """
    if isinstance(buffer, str):
        codes: Iterable[int] = map(ord, buffer)
    else:
        codes = buffer
    return "".join(chr(code) if is_printable(code) else "." for code in codes)
