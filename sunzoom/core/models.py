from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

TAU = 2 * math.pi


class NodeKind(str, Enum):
    """Node types in the region → scheme → village hierarchy."""

    ROOT = "root"
    REGION = "region"
    SCHEME = "scheme"
    VILLAGE = "village"
    COMPLETION_CATEGORY = "completion-category"
    LPCD_CATEGORY = "lpcd-category"

    @classmethod
    def parse(cls, value: Any) -> Optional["NodeKind"]:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class Status(str, Enum):
    """Secondary classification of schemes and villages."""

    FULLY_COMPLETED = "Fully Completed"
    PARTIALLY_COMPLETED = "Partially Completed"
    IN_PROGRESS = "In Progress"
    NOT_STARTED = "Not Started"
    # Scheme rollup
    COMPLETED = "completed"
    PROGRESS = "progress"
    # Village LPCD health
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value: Any) -> Optional["Status"]:
        if value is None:
            return None
        if isinstance(value, Status):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        key = " ".join(str(value).replace("-", " ").split()).lower()
        return _STATUS_ALIASES.get(key)


_STATUS_ALIASES: Dict[str, Status] = {
    "fully completed": Status.FULLY_COMPLETED,
    "completed": Status.FULLY_COMPLETED,
    "partially completed": Status.PARTIALLY_COMPLETED,
    "partial": Status.PARTIALLY_COMPLETED,
    "in progress": Status.IN_PROGRESS,
    "not started": Status.NOT_STARTED,
    "progress": Status.PROGRESS,
    "good": Status.GOOD,
    "warning": Status.WARNING,
    "critical": Status.CRITICAL,
}


class Category(str, Enum):
    ABOVE_LPCD = "Above 55 LPCD"
    BELOW_LPCD = "Below 55 LPCD"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        if value is None:
            return None
        if isinstance(value, Category):
            return value
        text = str(value).strip().lower()
        if text.startswith("above") or text.startswith(">"):
            return cls.ABOVE_LPCD
        if text.startswith("below") or text.startswith("<"):
            return cls.BELOW_LPCD
        return None


@dataclass
class HierarchyNode:
    """One node of the input hierarchy.

    `weight` is the node's own quantity; the partition solver adds the
    weights of all descendants on top of it.
    """

    name: str
    kind: NodeKind
    weight: float = 1.0
    status: Optional[Status] = None
    category: Optional[Category] = None
    color: Optional[str] = None
    children: List["HierarchyNode"] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add(self, child: "HierarchyNode") -> "HierarchyNode":
        self.children.append(child)
        return child

    def walk(self):
        """Pre-order traversal."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = dict(self.details)
        d.update({"name": self.name, "type": self.kind.value, "value": self.weight})
        if self.status is not None:
            d["status"] = self.status.value
        if self.category is not None:
            d["category"] = self.category.value
        if self.color:
            d["color"] = self.color
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d


@dataclass(frozen=True)
class ArcState:
    """Angular span [x0, x1) in radians and radial span [y0, y1) in rings."""

    x0: float
    x1: float
    y0: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    def lerp(self, other: "ArcState", t: float) -> "ArcState":
        return ArcState(
            self.x0 + (other.x0 - self.x0) * t,
            self.x1 + (other.x1 - self.x1) * t,
            self.y0 + (other.y0 - self.y0) * t,
            self.y1 + (other.y1 - self.y1) * t,
        )

    def close_to(self, other: "ArcState", tol: float = 1e-9) -> bool:
        return (
            abs(self.x0 - other.x0) <= tol
            and abs(self.x1 - other.x1) <= tol
            and abs(self.y0 - other.y0) <= tol
            and abs(self.y1 - other.y1) <= tol
        )


@dataclass
class LayoutNode:
    """Arena entry produced by the partition solver.

    `canonical` never changes after layout. Per-frame `current` and in-flight
    `target` states live on the owning LayoutTree, indexed by `id`.
    """

    id: int
    node: HierarchyNode
    depth: int
    value: float
    canonical: ArcState
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def kind(self) -> NodeKind:
        return self.node.kind

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_degenerate(self) -> bool:
        return self.canonical.x1 <= self.canonical.x0
