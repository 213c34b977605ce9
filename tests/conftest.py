import os

import pytest


def make_file(root, rel, size):
    path = os.path.join(str(root), rel)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"x" * size)
    return path


class FakeSink:
    def __init__(self, height=None):
        self._height = height
        self.screen = []
        self.erased = []

    def erase_last_lines(self, n):
        self.erased.append(n)
        if n:
            del self.screen[-n:]

    def write_line(self, text):
        self.screen.append(text)

    def flush(self):
        pass

    def height(self):
        return self._height


@pytest.fixture
def sample_dir(tmp_path):
    make_file(tmp_path, "a", 100)
    make_file(tmp_path, os.path.join("d", "b"), 300)
    return tmp_path


@pytest.fixture
def qapp():
    from PySide6.QtCore import QCoreApplication

    return QCoreApplication.instance() or QCoreApplication(["dirhist-tests"])
