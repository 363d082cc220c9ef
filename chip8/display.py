# Display - 64x32 monochrome framebuffer (replaces "vram")
#----------------------------------------------------------------------------------------------
# Pixels are only ever changed by XORing sprites onto the buffer or by clearing it.
# Sprites are clipped at the right and bottom edges, they never wrap around.

import numpy as np

from .config import WIDTH, HEIGHT


class Display:
    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width, self.height = width, height
        self.pixels = np.zeros((height, width), dtype=np.uint8)
        self.dirty = True     # so that we only update the window when needed

    def clear(self):
        self.pixels.fill(0)
        self.dirty = True

    def draw_sprite(self, x, y, sprite):
        """XOR ``sprite`` (one byte per row, MSB leftmost) at (x, y).

        The origin wraps (x mod width, y mod height), the sprite itself is
        clipped. Returns True if any pixel went from set to unset.
        """
        x, y = x % self.width, y % self.height
        rows = np.frombuffer(bytes(sprite), dtype=np.uint8).reshape(-1, 1)
        bits = np.unpackbits(rows, axis=1)[:self.height - y, :self.width - x]
        h, w = bits.shape
        region = self.pixels[y:y + h, x:x + w]
        collided = bool(np.any(region & bits))
        region ^= bits
        self.dirty = True
        return collided

    def snapshot(self):
        """Read-only (height, width) boolean copy of the buffer."""
        frame = self.pixels.astype(bool)
        frame.flags.writeable = False
        return frame

    def lit(self):
        return int(np.count_nonzero(self.pixels))
