from __future__ import annotations

from typing import Iterator, List, Optional, TextIO

from .ast import Node
from .environment import Environment


class Program:
    """Owns the top-level trees handed over by a front end.

    Trees parsed from several input chunks may be added to the same program;
    they all evaluate against one shared `Environment`, so functions defined
    by an earlier tree stay callable from later ones.
    """
    def __init__(self, env: Optional[Environment] = None):
        self.owns_env = env is None
        self.env = env if env is not None else Environment()
        self.trees: List[Node] = []

    def add(self, tree: Node):
        self.trees.append(tree)

    def clear(self):
        self.trees.clear()

    def __len__(self) -> int:
        return len(self.trees)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.trees)

    def __enter__(self) -> 'Program':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()
        if self.owns_env:
            self.env.close()
        return False

    def evaluate(self, index: int) -> float:
        return self.trees[index].evaluate(self.env)

    def evaluate_all(self) -> float:
        """Evaluate every tree in order and return the last result."""
        result = 0.0
        for tree in self.trees:
            result = tree.evaluate(self.env)
        return result

    def trace(self, out: Optional[TextIO] = None):
        for tree in self.trees:
            tree.trace(out)
