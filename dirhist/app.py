from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from typing import List, Optional

from PySide6.QtCore import QCoreApplication, QObject, QThread, QTimer, Signal, Slot

from .models import SizeTree
from .render import Renderer, TerminalSink
from .scanner import walk_tree

APP_NAME = "dirhist"
REFRESH_INTERVAL_MS = 500
LOG_LEVEL_ENV = "DIRHIST_LOG_LEVEL"

logger = logging.getLogger(__name__)


def resolve_root(path: Optional[str]) -> str:
    root = os.path.abspath(path or os.getcwd())
    if not os.path.isdir(root):
        raise NotADirectoryError(root)
    return root


def setup_logging(stream=None):
    level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, "").upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    pkg_logger = logging.getLogger("dirhist")
    pkg_logger.handlers[:] = [handler]
    pkg_logger.setLevel(level)


# -------------------- Worker thread --------------------
class ScanThread(QThread):
    done = Signal(int)  # files recorded

    def __init__(self, tree: SizeTree):
        super().__init__()
        self.tree = tree

    def run(self):
        recorded = 0
        try:
            recorded = walk_tree(self.tree)
        except Exception:
            logger.exception("scan of %s aborted", self.tree.root.name)
        self.done.emit(recorded)


# -------------------- Live view --------------------
class LiveView(QObject):
    """Redraws the histogram on a timer until the scan thread reports done."""
    finished = Signal()

    def __init__(self, tree: SizeTree, renderer: Optional[Renderer] = None,
                 interval_ms: int = REFRESH_INTERVAL_MS):
        super().__init__()
        self.tree = tree
        self.renderer = renderer or Renderer()
        self.scan = ScanThread(tree)
        self.scan.done.connect(self.on_scan_done)
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.on_tick)

    def start(self):
        self._timer.start()
        self.scan.start()

    @Slot()
    def on_tick(self):
        self.renderer.render(self.tree)

    @Slot(int)
    def on_scan_done(self, recorded: int):
        self._timer.stop()
        self.scan.wait()
        self.renderer.render(self.tree)
        self.finished.emit()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Live histogram of disk usage under a directory.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to scan (default: current directory)",
    )
    return parser.parse_args(argv)


def run(argv: Optional[List[str]] = None, sink: Optional[TerminalSink] = None) -> int:
    args = parse_args(argv)
    setup_logging()

    try:
        root = resolve_root(args.path)
    except NotADirectoryError as e:
        print(f"{e} is not a directory", file=sys.stderr)
        return 1

    app = QCoreApplication.instance() or QCoreApplication([APP_NAME])
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    tree = SizeTree(root)
    view = LiveView(tree, Renderer(sink))
    view.finished.connect(app.quit)
    view.start()
    app.exec()
    return 0


def main():
    sys.exit(run())
