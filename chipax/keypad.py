"""Physical keyboard to CHIP-8 keypad mapping.

    Keypad                   Keyboard
    +-+-+-+-+                +-+-+-+-+
    |1|2|3|C|                |1|2|3|4|
    +-+-+-+-+                +-+-+-+-+
    |4|5|6|D|                |Q|W|E|R|
    +-+-+-+-+       =>       +-+-+-+-+
    |7|8|9|E|                |A|S|D|F|
    +-+-+-+-+                +-+-+-+-+
    |A|0|B|F|                |Z|X|C|V|
    +-+-+-+-+                +-+-+-+-+
"""

from typing import Iterable

import numpy as np

from chipax.constants import NUM_KEYS

KEY_LAYOUT = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def keypad_snapshot(pressed: Iterable[str]) -> np.ndarray:
    """Build the 16-key snapshot from the names of the keyboard keys held down.

    Names are matched case-insensitively; keys outside the layout are ignored.
    """
    snapshot = np.zeros(NUM_KEYS, dtype=np.bool_)
    for name in pressed:
        index = KEY_LAYOUT.get(name.lower())
        if index is not None:
            snapshot[index] = True
    return snapshot
