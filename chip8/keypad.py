# Keypad - 16 key states latched by the host before each cycle batch
#----------------------------------------------------------------------------------------------
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F

import numpy as np

from .errors import OperandError

KEY_COUNT = 16


class Keypad:
    def __init__(self):
        self.keys = np.zeros(KEY_COUNT, dtype=bool)

    def latch(self, states):
        states = np.asarray(states, dtype=bool)
        if states.shape != (KEY_COUNT,):
            raise ValueError(f"expected {KEY_COUNT} key states, got shape {states.shape}")
        self.keys[:] = states

    def pressed(self, key):
        if not 0 <= key < KEY_COUNT:
            raise OperandError(f"key index 0x{key:02X} is not on the keypad")
        return bool(self.keys[key])

    def newly_pressed(self, previous):
        """Lowest key that is down now but was up in ``previous``, or None."""
        down = np.flatnonzero(self.keys & ~np.asarray(previous, dtype=bool))
        return int(down[0]) if len(down) else None

    def copy(self):
        return self.keys.copy()

    def reset(self):
        self.keys.fill(False)
