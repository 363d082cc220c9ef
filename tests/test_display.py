"""
Display buffer tests: XOR composition, collision flag and edge clipping.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
from chip8.display import Display


class TestDrawSprite:

    def test_draw_sets_pixels(self):
        d = Display()
        assert d.draw_sprite(2, 3, b"\xA0") is False
        frame = d.snapshot()
        assert frame[3, 2] and not frame[3, 3] and frame[3, 4]
        assert d.lit() == 2

    @pytest.mark.parametrize("x, y", [(0, 0), (10, 7), (60, 30), (63, 31)])
    def test_double_draw_restores_pixels(self, x, y):
        d = Display()
        d.draw_sprite(5, 5, b"\xFF\x81\xFF")
        before = d.snapshot().copy()
        sprite = b"\x3C\x42\x81\x81\x42\x3C"
        d.draw_sprite(x, y, sprite)
        d.draw_sprite(x, y, sprite)
        assert (d.snapshot() == before).all()

    def test_collision_only_when_pixel_turns_off(self):
        d = Display()
        d.draw_sprite(0, 0, b"\xF0")
        assert d.draw_sprite(4, 0, b"\xF0") is False
        assert d.draw_sprite(3, 0, b"\x80") is True
        assert not d.snapshot()[0, 3]

    def test_clipped_at_right_edge(self):
        d = Display()
        assert d.draw_sprite(60, 0, b"\xFF") is False
        frame = d.snapshot()
        assert frame[0, 60:].all()
        assert d.lit() == 4
        assert not frame[0, :8].any()

    def test_clipped_at_bottom_edge(self):
        d = Display()
        d.draw_sprite(0, 30, b"\x80\x80\x80\x80")
        frame = d.snapshot()
        assert frame[30, 0] and frame[31, 0]
        assert d.lit() == 2
        assert not frame[0:2, 0].any()

    def test_origin_wraps(self):
        d = Display()
        d.draw_sprite(64 + 1, 32 + 2, b"\x80")
        assert d.snapshot()[2, 1]

    def test_empty_sprite(self):
        d = Display()
        assert d.draw_sprite(10, 10, b"") is False
        assert d.lit() == 0


class TestBuffer:

    def test_clear(self):
        d = Display()
        d.draw_sprite(0, 0, b"\xFF\xFF")
        d.dirty = False
        d.clear()
        assert d.lit() == 0
        assert d.dirty

    def test_snapshot_is_read_only_copy(self):
        d = Display()
        frame = d.snapshot()
        assert frame.shape == (32, 64)
        assert frame.dtype == np.bool_
        with pytest.raises(ValueError):
            frame[0, 0] = True
        d.draw_sprite(0, 0, b"\x80")
        assert not frame[0, 0]

    def test_draw_marks_dirty(self):
        d = Display()
        d.dirty = False
        d.draw_sprite(0, 0, b"\x00")
        assert d.dirty
