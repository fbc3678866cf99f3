"""Tests for the rendering primitives."""

from procfmt.render import (
    is_printable,
    join,
    render_address,
    render_bool,
    render_hex,
    render_octal,
    render_printable,
)


class TestRenderOctal:
    """Tests for octal mask rendering."""

    def test_zero_is_padded(self):
        """Test zero renders as four zeros."""
        assert render_octal(0) == "0000"

    def test_small_values_are_padded(self):
        """Test values are zero-padded to four digits."""
        assert render_octal(8) == "0010"
        assert render_octal(0o022) == "0022"
        assert render_octal(0o777) == "0777"

    def test_width_is_a_minimum(self):
        """Test long values are never truncated."""
        assert render_octal(0o177777) == "177777"

    def test_custom_width(self):
        """Test the width parameter."""
        assert render_octal(7, width=2) == "07"


class TestRenderHex:
    """Tests for hexadecimal mask rendering."""

    def test_zero_is_padded(self):
        """Test zero renders as sixteen zeros."""
        assert render_hex(0) == "0000000000000000"

    def test_lowercase_and_padded(self):
        """Test digits are lowercase and zero-padded."""
        assert render_hex(0xDEADBEEF) == "00000000deadbeef"

    def test_full_width_mask(self):
        """Test an all-ones 64-bit mask."""
        assert render_hex(2**64 - 1) == "ffffffffffffffff"

    def test_width_is_a_minimum(self):
        """Test masks wider than 64 bits are not truncated."""
        assert render_hex(2**64) == "10000000000000000"


def test_render_address():
    """Test addresses render as unpadded 0x hex."""
    assert render_address(0) == "0x0"
    assert render_address(0x7FFD1000) == "0x7ffd1000"


def test_render_bool():
    """Test booleans render as lowercase words."""
    assert render_bool(True) == "true"
    assert render_bool(False) == "false"


class TestJoin:
    """Tests for the sequence joiner."""

    def test_empty(self):
        """Test an empty sequence renders as the empty string."""
        assert join([]) == ""

    def test_single(self):
        """Test a single element has no separator."""
        assert join(["a"]) == "a"

    def test_many(self):
        """Test elements are comma separated without a trailing comma."""
        assert join(["a", "b", "c"]) == "a,b,c"

    def test_order_and_duplicates_preserved(self):
        """Test repeated ids are kept in source order."""
        assert join([27, 4, 27, 1000]) == "27,4,27,1000"

    def test_accepts_generators(self):
        """Test any iterable can be joined."""
        assert join(n * 2 for n in range(3)) == "0,2,4"


class TestRenderPrintable:
    """Tests for the printable-filtered buffer renderer."""

    def test_boundaries(self):
        """Test 0x21 and 0x7e are kept while NUL and DEL are masked."""
        assert render_printable(bytes([0x41, 0x00, 0x7E, 0x7F, 0x21])) == "A.~.!"

    def test_space_is_masked(self):
        """Test space (0x20) falls outside the printable range."""
        assert render_printable(b"a b") == "a.b"

    def test_length_preserved(self):
        """Test output has one character per input byte."""
        buffer = bytes(range(256))
        assert len(render_printable(buffer)) == 256

    def test_high_bytes_masked(self):
        """Test bytes above 0x7e are masked."""
        assert render_printable(b"\x80\xff") == ".."

    def test_empty(self):
        """Test an empty buffer renders as the empty string."""
        assert render_printable(b"") == ""

    def test_accepts_buffer_types(self):
        """Test bytearray, memoryview and int lists are accepted."""
        assert render_printable(bytearray(b"ok\n")) == "ok."
        assert render_printable(memoryview(b"ok\n")) == "ok."
        assert render_printable([0x6F, 0x6B, 0x0A]) == "ok."

    def test_idempotent(self):
        """Test re-filtering already filtered output is a no-op."""
        once = render_printable(bytes(range(256)))
        assert render_printable(once) == once
        assert render_printable(once.encode("ascii")) == once

    def test_is_printable(self):
        """Test the printable range check."""
        assert is_printable(ord("."))
        assert not is_printable(0x20)
        assert not is_printable(0x7F)
