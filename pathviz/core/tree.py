# pathviz/core/tree.py
#!/usr/bin/env python3
"""
Path reconstruction and the exploration-tree projection.

The tree is never maintained incrementally: build_exploration_tree() derives
it from scratch out of the parent map, the current path and the "current"
marker each time it is called, and leaves its inputs untouched.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from pathviz.core.types import Cell


def reconstruct_path(came_from: Mapping[Cell, Optional[Cell]], goal: Cell) -> List[Cell]:
    """Follow parent links back from goal, then reverse to run start -> goal.

    The walk stops at the first cell without a parent (or mapped to None),
    which is the start for every strategy in this package.
    """
    path: List[Cell] = [goal]
    cur = goal
    while came_from.get(cur) is not None:
        cur = came_from[cur]
        path.append(cur)
    path.reverse()
    return path


def node_depth(parents: Mapping[Cell, Optional[Cell]], cell: Cell) -> int:
    """Parent hops from cell up to the root."""
    depth = 0
    seen = {cell}
    cur = parents.get(cell)
    while cur is not None and cur not in seen:
        depth += 1
        seen.add(cur)
        cur = parents.get(cur)
    return depth


@dataclass
class TreeNode:
    cell: Cell
    children: List["TreeNode"] = field(default_factory=list)
    depth: int = 0
    is_in_path: bool = False
    is_current: bool = False

    def walk(self) -> Iterator["TreeNode"]:
        """Preorder traversal."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def size(self) -> int:
        return sum(1 for _ in self.walk())

    def find(self, cell: Cell) -> Optional["TreeNode"]:
        return next((n for n in self.walk() if n.cell == cell), None)


def build_exploration_tree(parents: Mapping[Cell, Optional[Cell]],
                           start: Cell,
                           path: Iterable[Cell] = (),
                           current: Optional[Cell] = None) -> TreeNode:
    on_path = set(path)

    def make(c: Cell, depth: int) -> TreeNode:
        return TreeNode(c, [], depth, c in on_path, c == current)

    nodes: Dict[Cell, TreeNode] = {start: make(start, 0)}

    # Insertion order of the parent map decides attachment; a child whose
    # parent has no node yet is left out of this projection.
    for child, parent in parents.items():
        if child not in nodes:
            nodes[child] = make(child, node_depth(parents, child))
        if parent is not None and parent in nodes and child != start:
            nodes[parent].children.append(nodes[child])

    return nodes[start]
