from __future__ import annotations
import os
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

@dataclass
class Node:
    name: str
    size: int = 0
    children: Dict[str, "Node"] = field(default_factory=dict)

@dataclass
class Snapshot:
    total: int
    files: int
    children: List[Tuple[str, int]]  # (name, size), unordered

class SizeTree:
    """Accumulating size tree fed by the walker and read by the renderer.

    Every recorded file adds its size to each node from the root down to the
    file's own leaf node and bumps the file counter. There is no removal;
    recording the same path twice counts it twice.
    """

    def __init__(self, root_path: str):
        self.root = Node(name=root_path)
        self.files = 0
        self._lock = threading.Lock()

    def record(self, rel_path: str, size: int) -> None:
        parts = [p for p in rel_path.split(os.sep) if p]
        with self._lock:
            node = self.root
            node.size += size
            for part in parts:
                child = node.children.get(part)
                if child is None:
                    child = Node(name=part)
                    node.children[part] = child
                node = child
                node.size += size
            self.files += 1

    def children_of(self, node: Optional[Node] = None) -> List[Node]:
        node = node or self.root
        with self._lock:
            return list(node.children.values())

    def find(self, rel_path: str) -> Optional[Node]:
        parts = [p for p in rel_path.split(os.sep) if p]
        with self._lock:
            node = self.root
            for part in parts:
                node = node.children.get(part)
                if node is None:
                    return None
            return node

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                total=self.root.size,
                files=self.files,
                children=[(c.name, c.size) for c in self.root.children.values()],
            )
