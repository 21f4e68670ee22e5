"""Core: hierarchy, partition layout, zoom state machine."""

from .hierarchy import HierarchyBuilder, build_hierarchy, build_status_rings, hierarchy_from_dict, load_dataset
from .models import TAU, ArcState, Category, HierarchyNode, LayoutNode, NodeKind, Status
from .partition import LayoutTree, partition
from .transition import ZoomController, ease_cubic_in_out, zoom_targets

# navigation depends on views, which depend on the modules above
from .navigation import FocusEvent, HoverEvent, NavigationShell  # noqa: E402

__all__ = [
    "TAU",
    "ArcState",
    "Category",
    "HierarchyNode",
    "LayoutNode",
    "NodeKind",
    "Status",
    "HierarchyBuilder",
    "build_hierarchy",
    "build_status_rings",
    "hierarchy_from_dict",
    "load_dataset",
    "LayoutTree",
    "partition",
    "ZoomController",
    "ease_cubic_in_out",
    "zoom_targets",
    "FocusEvent",
    "HoverEvent",
    "NavigationShell",
]
