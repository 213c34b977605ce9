import io
import os

from dirhist.models import SizeTree, Snapshot
from dirhist.render import (
    BAR_GLYPH, BAR_WIDTH, CLEAR_LINE, CURSOR_UP, Renderer, TerminalSink,
    histogram_lines,
)

from conftest import FakeSink


def bar_of(line):
    return line[:21].strip().count(BAR_GLYPH)


def sample_tree():
    tree = SizeTree("/scan")
    tree.record("a", 100)
    tree.record(os.path.join("d", "b"), 300)
    return tree


def test_frame_sorted_ascending_with_total():
    frame = histogram_lines(sample_tree().snapshot())

    assert len(frame) == 3
    assert frame[0].endswith("   a")
    assert frame[1].endswith("   d")
    assert bar_of(frame[0]) == 7
    assert bar_of(frame[1]) == BAR_WIDTH
    assert frame[2].strip().startswith("TOTAL:")
    assert frame[2].endswith("(2 files)")
    assert "400 B" in frame[2]


def test_empty_tree_renders_only_total():
    frame = histogram_lines(SizeTree("/scan").snapshot())
    assert frame == [f"{'TOTAL:':>21} {'0 B':>10}   (0 files)"]


def test_equal_sizes_are_ordered_by_name():
    snap = Snapshot(total=30, files=3, children=[("c", 10), ("a", 10), ("b", 10)])
    names = [line.rsplit(" ", 1)[-1] for line in histogram_lines(snap)[:-1]]
    assert names == ["a", "b", "c"]


def test_bars_monotonic_in_size():
    children = [(f"n{i}", s) for i, s in enumerate([1, 50, 51, 400, 999, 1000, 7])]
    snap = Snapshot(total=sum(s for _, s in children), files=7, children=children)
    frame = histogram_lines(snap)[:-1]
    bars = [bar_of(line) for line in frame]
    assert bars == sorted(bars)
    assert bars[-1] == BAR_WIDTH


def test_zero_sized_children_have_no_bar():
    snap = Snapshot(total=0, files=2, children=[("a", 0), ("b", 0)])
    frame = histogram_lines(snap)
    assert [bar_of(line) for line in frame[:-1]] == [0, 0]


def test_height_keeps_largest_children():
    children = [(f"n{i}", i + 1) for i in range(10)]
    snap = Snapshot(total=55, files=10, children=children)
    frame = histogram_lines(snap, height=5)

    assert len(frame) == 4
    assert [line.rsplit(" ", 1)[-1] for line in frame[:-1]] == ["n7", "n8", "n9"]
    assert bar_of(frame[-2]) == BAR_WIDTH


def test_tiny_height_shows_only_total():
    snap = Snapshot(total=3, files=1, children=[("a", 3)])
    assert len(histogram_lines(snap, height=2)) == 1


def test_renderer_redraws_in_place():
    sink = FakeSink()
    renderer = Renderer(sink)
    tree = sample_tree()

    first = renderer.render(tree)
    assert renderer.lines == 3
    second = renderer.render(tree)

    assert first == second
    assert sink.erased == [0, 3]
    assert sink.screen == second

    tree.record(os.path.join("e", "f"), 5)
    third = renderer.render(tree)
    assert renderer.lines == 4
    assert sink.screen == third


def test_renderer_uses_sink_height():
    sink = FakeSink(height=3)
    renderer = Renderer(sink)
    tree = sample_tree()
    frame = renderer.render(tree)
    assert len(frame) == 2
    assert frame[0].endswith("   d")


def test_terminal_sink_escapes():
    buf = io.StringIO()
    sink = TerminalSink(buf)
    sink.write_line("one")
    sink.erase_last_lines(2)
    sink.erase_last_lines(0)
    assert buf.getvalue() == "one\n" + (CURSOR_UP + CLEAR_LINE) * 2
    assert sink.height() is None
