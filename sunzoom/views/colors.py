"""Wedge fill colors.

Precedence, highest first: explicit node color, LPCD category, status,
node kind, neutral gray. Upstream data may set several of these at once.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..core.models import Category, HierarchyNode, NodeKind, Status

FALLBACK_COLOR = "#6b7280"

CATEGORY_COLORS: Dict[Category, str] = {
    Category.ABOVE_LPCD: "#16a34a",
    Category.BELOW_LPCD: "#dc2626",
}

STATUS_COLORS: Dict[Status, str] = {
    Status.FULLY_COMPLETED: "#22c55e",
    Status.PARTIALLY_COMPLETED: "#f59e0b",
    Status.IN_PROGRESS: "#ef4444",
    Status.NOT_STARTED: "#94a3b8",
    Status.COMPLETED: "#10b981",
    Status.PROGRESS: "#f59e0b",
    Status.GOOD: "#22c55e",
    Status.WARNING: "#fbbf24",
    Status.CRITICAL: "#ef4444",
}

KIND_COLORS: Dict[NodeKind, str] = {
    NodeKind.ROOT: "#1e293b",
    NodeKind.REGION: "#3b82f6",
    NodeKind.SCHEME: "#06b6d4",
    NodeKind.VILLAGE: "#f59e0b",
    NodeKind.COMPLETION_CATEGORY: "#8b5cf6",
    NodeKind.LPCD_CATEGORY: "#10b981",
}


def node_color(node: HierarchyNode) -> str:
    """Resolve the fill color for a node."""
    if node.color:
        return node.color
    color: Optional[str] = None
    if node.category is not None:
        color = CATEGORY_COLORS.get(node.category)
    if color is None and node.status is not None:
        color = STATUS_COLORS.get(node.status)
    if color is None:
        color = KIND_COLORS.get(node.kind)
    return color or FALLBACK_COLOR
