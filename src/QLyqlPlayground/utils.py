from itertools import accumulate
from typing import Callable

ENC = "utf-16-le"


def len16(val: str) -> int:
    """Get the number of utf16 code units where surrogate pairs count as 2"""
    return len(val.encode(ENC)) // 2


def char_to_utf16_map(text: str) -> Callable[[int], int]:
    """Build a function converting str indexes into Qt document positions

    Parsers report offsets in code points while Qt counts utf16 code units.
    The two only differ once a character outside the BMP shows up.
    """
    if len16(text) == len(text):
        return lambda i: i
    units = [0, *accumulate(2 if ord(c) > 0xFFFF else 1 for c in text)]
    return units.__getitem__
