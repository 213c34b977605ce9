from __future__ import annotations
import math

def format_bytes(num: int) -> str:
    if num < 0:
        return str(num)
    units = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]
    x = float(num)
    for u in units:
        if x < 1024.0 or u == units[-1]:
            return f"{x:.1f} {u}" if u != "B" else f"{int(x)} {u}"
        x /= 1024.0
    return f"{x:.1f} EiB"

def bar_length(size: int, largest: int, width: int) -> int:
    # any non-empty child gets at least one glyph, the largest gets all of them
    if largest <= 0 or size <= 0:
        return 0
    return min(math.ceil(size / largest * width), width)
