"""Tests for protocol module."""

import pytest

from ite_rgb.exceptions import UnknownModeError
from ite_rgb.models import RGB, LightingMode
from ite_rgb.protocol import encode_row, mode_frame, row_select_frame


class TestModeFrame:
    """Tests for mode_frame function."""

    def test_by_enum(self) -> None:
        assert mode_frame(LightingMode.OFF) == bytes.fromhex("0802030500080100")

    def test_by_name(self) -> None:
        assert mode_frame("Raindrops") == bytes.fromhex("08020a0532080000")

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownModeError):
            mode_frame("strobe")


class TestRowSelectFrame:
    """Tests for row_select_frame function."""

    @pytest.mark.parametrize("row", range(6))
    def test_layout(self, row: int) -> None:
        frame = row_select_frame(row)
        assert frame == bytes([0x16, 0x00, row, 0x00, 0x00, 0x00, 0x00, 0x00])

    @pytest.mark.parametrize("row", [-1, 6])
    def test_out_of_range(self, row: int) -> None:
        with pytest.raises(ValueError, match="range 0-5"):
            row_select_frame(row)


class TestEncodeRow:
    """Tests for encode_row function."""

    def test_channel_offsets(self) -> None:
        """Each column lands at blue+c, green+21+c, red+42+c."""
        row = [RGB(red=c, green=100 + c, blue=200 + c) for c in range(21)]
        payload = encode_row(row)

        assert len(payload) == 64
        for c in range(20):
            assert payload[c] == row[c].blue
            assert payload[c + 21] == row[c].green
            assert payload[c + 42] == row[c].red

    def test_unused_bytes_are_zero(self) -> None:
        """Bytes 20, 41, 62 and 63 never carry color data."""
        payload = encode_row([RGB(255, 255, 255)] * 21)
        assert payload[20] == 0
        assert payload[41] == 0
        assert payload[62:] == b"\x00\x00"

    def test_red_row(self) -> None:
        payload = encode_row([RGB(255, 0, 0)] * 21)
        assert payload[42:62] == b"\xff" * 20
        assert payload[:42] == bytes(42)

    def test_values_carried_unchanged(self) -> None:
        """No gamma or dimming is applied."""
        payload = encode_row([RGB(1, 127, 254)] * 21)
        assert payload[0] == 254
        assert payload[21] == 127
        assert payload[42] == 1

    def test_black_row(self) -> None:
        assert encode_row([RGB(0, 0, 0)] * 21) == bytes(64)
