"""
Partition layout (icicle / sunburst).

Each node gets an angular span proportional to its aggregated value and a
radial band equal to its depth. Nodes are stored in an arena indexed by a
stable pre-order id; per-frame `current` states and in-flight `target`
states are held as whole tuples on the tree and replaced wholesale.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import UnknownNodeError
from .models import TAU, ArcState, HierarchyNode, LayoutNode

Frame = Tuple[ArcState, ...]


class LayoutTree:
    """Arena of LayoutNodes plus the published render state."""

    def __init__(self, nodes: List[LayoutNode]):
        if not nodes:
            raise ValueError("layout tree needs at least a root")
        self.nodes = nodes
        self.height = max(n.depth for n in nodes)
        self._frame: Frame = self.canonical_frame()
        self._targets: Optional[Frame] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[LayoutNode]:
        return iter(self.nodes)

    def __getitem__(self, node_id: int) -> LayoutNode:
        if not 0 <= node_id < len(self.nodes):
            raise UnknownNodeError(node_id)
        return self.nodes[node_id]

    @property
    def root(self) -> LayoutNode:
        return self.nodes[0]

    # --- state ---

    def canonical_frame(self) -> Frame:
        return tuple(n.canonical for n in self.nodes)

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def targets(self) -> Optional[Frame]:
        return self._targets

    def current(self, node_id: int) -> ArcState:
        return self._frame[self[node_id].id]

    def target(self, node_id: int) -> Optional[ArcState]:
        if self._targets is None:
            return None
        return self._targets[self[node_id].id]

    def publish(self, frame: Frame) -> None:
        if len(frame) != len(self.nodes):
            raise ValueError("frame size does not match tree")
        self._frame = tuple(frame)

    def set_targets(self, targets: Optional[Frame]) -> None:
        if targets is not None and len(targets) != len(self.nodes):
            raise ValueError("target size does not match tree")
        self._targets = tuple(targets) if targets is not None else None

    # --- navigation ---

    def ancestors(self, node_id: int) -> List[LayoutNode]:
        """Root-to-node chain, inclusive."""
        chain = []
        node: Optional[LayoutNode] = self[node_id]
        while node is not None:
            chain.append(node)
            node = self.nodes[node.parent] if node.parent is not None else None
        chain.reverse()
        return chain

    def path(self, node_id: int) -> List[str]:
        return [n.name for n in self.ancestors(node_id)]

    def find(self, names: Sequence[str]) -> int:
        """Resolve a name path below the root (first match per level)."""
        node = self.root
        for name in names:
            match = next((self.nodes[c] for c in node.children if self.nodes[c].name == name), None)
            if match is None:
                raise UnknownNodeError("/".join(names))
            node = match
        return node.id

    def descendants(self, node_id: int) -> List[LayoutNode]:
        out = []
        stack = [node_id]
        while stack:
            n = self[stack.pop()]
            out.append(n)
            stack.extend(reversed(n.children))
        return out


def aggregate(root: HierarchyNode) -> Dict[int, float]:
    """Sum each node's own weight with all of its descendants' weights."""
    sums: Dict[int, float] = {}

    def visit(node: HierarchyNode) -> float:
        total = max(0.0, float(node.weight or 0.0))
        for child in node.children:
            total += visit(child)
        sums[id(node)] = total
        return total

    visit(root)
    return sums


def partition(root: HierarchyNode, total_angle: float = TAU) -> LayoutTree:
    """Lay out `root` as a sunburst partition.

    Siblings are ordered by descending aggregated value (stable) and split
    their parent's angular span contiguously in proportion to that value.
    Every node occupies the ring `[depth, depth + 1)`.
    """
    sums = aggregate(root)
    nodes: List[LayoutNode] = []

    def place(node: HierarchyNode, depth: int, x0: float, x1: float, parent: Optional[int]) -> int:
        layout = LayoutNode(
            id=len(nodes),
            node=node,
            depth=depth,
            value=sums[id(node)],
            canonical=ArcState(x0, x1, float(depth), float(depth + 1)),
            parent=parent,
        )
        nodes.append(layout)

        children = sorted(node.children, key=lambda c: -sums[id(c)])
        total = sum(sums[id(c)] for c in children)
        span = x1 - x0
        acc = 0.0
        last = max((i for i, c in enumerate(children) if sums[id(c)] > 0), default=-1)
        for i, child in enumerate(children):
            if total > 0 and i > last:
                # zero-sum tail sits on the parent's end
                c0 = c1 = x1
            elif total > 0:
                c0 = x0 + span * acc / total
                acc += sums[id(child)]
                c1 = x1 if i == last else x0 + span * acc / total
            else:
                c0 = c1 = x0
            layout.children.append(place(child, depth + 1, c0, max(c0, c1), layout.id))
        return layout.id

    place(root, 0, 0.0, total_angle, None)
    return LayoutTree(nodes)
