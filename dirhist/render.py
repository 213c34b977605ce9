from __future__ import annotations
import os
import sys
from typing import List, Optional, TextIO
from .models import SizeTree, Snapshot
from .utils import bar_length, format_bytes

BAR_WIDTH = 20
BAR_GLYPH = "#"

CURSOR_UP = "\x1b[1A"
CLEAR_LINE = "\x1b[2K"


class TerminalSink:
    """Line-oriented output with in-place erase, backed by a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def erase_last_lines(self, n: int):
        if n > 0:
            self.stream.write((CURSOR_UP + CLEAR_LINE) * n)

    def write_line(self, text: str):
        self.stream.write(text + "\n")

    def flush(self):
        self.stream.flush()

    def height(self) -> Optional[int]:
        if not self.stream.isatty():
            return None
        try:
            return os.get_terminal_size(self.stream.fileno()).lines
        except (OSError, ValueError):
            return None


def histogram_line(name: str, size: int, largest: int) -> str:
    bar = BAR_GLYPH * bar_length(size, largest, BAR_WIDTH)
    return f"{bar:>21} {format_bytes(size):>10}   {name}"


def total_line(total: int, files: int) -> str:
    return f"{'TOTAL:':>21} {format_bytes(total):>10}   ({files} files)"


def histogram_lines(snap: Snapshot, height: Optional[int] = None) -> List[str]:
    """Build one frame: children ascending by size, then the total line.

    With a known terminal height the frame is cut to height - 1 rows,
    keeping the largest children.
    """
    children = sorted(snap.children, key=lambda c: (c[1], c[0]))
    out: List[str] = []
    if children:
        largest = children[-1][1]
        if height is not None:
            room = max(0, height - 2)
            children = children[len(children) - room:] if room else []
        for name, size in children:
            out.append(histogram_line(name, size, largest))
    out.append(total_line(snap.total, snap.files))
    return out


class Renderer:
    def __init__(self, sink: Optional[TerminalSink] = None):
        self.sink = sink or TerminalSink()
        self.lines = 0

    def render(self, tree: SizeTree) -> List[str]:
        frame = histogram_lines(tree.snapshot(), self.sink.height())
        self.sink.erase_last_lines(self.lines)
        self.lines = 0
        for line in frame:
            self.sink.write_line(line)
            self.lines += 1
        self.sink.flush()
        return frame
