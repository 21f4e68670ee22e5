"""Shared fixtures: a small region → scheme → village hierarchy."""

import pytest

from sunzoom.config import SunburstConfig
from sunzoom.core.models import HierarchyNode, NodeKind


@pytest.fixture
def config():
    """Default config with a short transition."""
    return SunburstConfig(duration_ms=1000)


@pytest.fixture
def small_tree():
    """Root → A(3), B(1) with leaves under each; A → A1(2), A2(1)."""
    root = HierarchyNode("Root", NodeKind.ROOT, weight=0)
    a = root.add(HierarchyNode("A", NodeKind.REGION, weight=0))
    a.add(HierarchyNode("A1", NodeKind.SCHEME, weight=2))
    a.add(HierarchyNode("A2", NodeKind.SCHEME, weight=1))
    b = root.add(HierarchyNode("B", NodeKind.REGION, weight=0))
    b.add(HierarchyNode("B1", NodeKind.SCHEME, weight=1))
    return root


@pytest.fixture
def records():
    """Flat rows as the dashboard query returns them."""
    regions = [
        {"region_name": "Konkan", "region_id": "1", "total_schemes_integrated": 2},
        {"region_name": "Pune", "region_id": "2"},
    ]
    schemes = [
        {"scheme_id": "S1", "scheme_name": "Scheme One", "region": "Konkan", "region_id": "1",
         "fully_completion_scheme_status": "Fully Completed"},
        {"scheme_id": "S2", "scheme_name": "Scheme Two", "region": "Konkan",
         "fully_completion_scheme_status": "Partially Completed"},
        {"scheme_id": "S3", "scheme_name": "Scheme Three", "region": "Pune"},
        {"scheme_id": "S9", "scheme_name": "Orphan", "region": "Nowhere"},
    ]
    villages = [
        {"village_name": "V1", "scheme_id": "S1", "region": "Konkan", "population": 500,
         "lpcd_value_day1": 60, "lpcd_value_day2": 70},
        {"village_name": "V2", "scheme_id": "S1", "region": "Konkan", "population": "1,500",
         "lpcd_value_day1": 30},
        {"village_name": "V3", "scheme_id": "S2", "population": None, "lpcd_values": [45, "n/a", 50]},
        {"village_name": "V4", "scheme_id": "S3", "region": "Pune", "population": 200},
        {"village_name": "Lost", "scheme_id": "S404", "population": 10},
    ]
    return regions, schemes, villages
