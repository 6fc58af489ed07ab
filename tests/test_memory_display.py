"""Tests for the in-memory display."""

import pytest

from kubeblinkt.devices import OFF, DisplayAdapter, DisplayCall, MemoryDisplay


@pytest.mark.unit
class TestMemoryDisplay:
    """Test MemoryDisplay."""

    def test_satisfies_protocol(self):
        assert isinstance(MemoryDisplay(), DisplayAdapter)

    def test_set_is_buffered_until_show(self):
        display = MemoryDisplay()

        display.set(2, "00FF00", 0.5)
        assert display.frame[2] == (OFF, 0.0)

        display.show()
        assert display.frame[2] == ("00FF00", 0.5)
        assert display.frames_shown == 1

    def test_flash_leaves_pixel_off(self):
        display = MemoryDisplay()
        display.set(0, "00FF00", 0.5)

        display.flash(0, "FF0000", 0.5, 2, 0.05)
        display.show()

        assert display.frame[0] == (OFF, 0.0)
        assert display.flashes() == [(0, "FF0000")]

    def test_index_out_of_range(self):
        display = MemoryDisplay()
        with pytest.raises(IndexError):
            display.set(8, "00FF00", 0.5)
        with pytest.raises(IndexError):
            display.flash(-1, "00FF00", 0.5, 2, 0.05)

    def test_cleanup(self):
        display = MemoryDisplay()
        display.set(0, "00FF00", 0.5)
        display.show()

        display.cleanup("FF0000", 0.2)

        assert display.cleaned_up
        assert display.frame == [(OFF, 0.0)] * 8
        assert display.calls[-1] == DisplayCall("cleanup", None, "FF0000", 0.2)

    def test_describe_frame(self):
        display = MemoryDisplay(pixel_count=2)
        display.set(0, "00FF00", 0.5)
        display.show()

        assert display.describe_frame() == ["00FF00@0.50", "000000@0.00"]

    def test_reset_calls_keeps_frame(self):
        display = MemoryDisplay()
        display.set(0, "00FF00", 0.5)
        display.show()

        display.reset_calls()

        assert display.calls == []
        assert display.frame[0] == ("00FF00", 0.5)
