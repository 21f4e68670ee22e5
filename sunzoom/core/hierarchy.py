"""
Hierarchy construction from flat region / scheme / village records.

Records arrive as the dashboard's query rows (plain dicts). Every numeric
field is coerced leniently: malformed values fall back to defaults, and
rows whose parent cannot be found are dropped from the tree and logged.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..config import SunburstConfig
from ..errors import SunzoomError
from .models import Category, HierarchyNode, NodeKind, Status

logger = logging.getLogger(__name__)

LPCD_DAYS = 7
FULLY_COMPLETED_LABEL = "Fully Completed"

_NODE_KEYS = {"name", "type", "value", "status", "category", "color", "children"}


def as_number(value: Any) -> Optional[float]:
    """Coerce a loosely-typed field to float, or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        f = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            f = float(text)
        except ValueError:
            return None
    if math.isnan(f) or math.isinf(f):
        return None
    return f


def _as_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _name(value: Any) -> str:
    return " ".join(str(value or "").split())


@dataclass
class RegionRecord:
    name: str
    region_id: Optional[str] = None
    total_schemes_integrated: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RegionRecord":
        return cls(
            name=_name(d.get("region_name") or d.get("name")),
            region_id=_as_id(d.get("region_id")),
            total_schemes_integrated=as_number(d.get("total_schemes_integrated")),
            extra=dict(d),
        )


@dataclass
class SchemeRecord:
    scheme_id: str
    name: str
    region: str
    region_id: Optional[str] = None
    completion_status: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def fully_completed(self) -> bool:
        return (self.completion_status or "").strip() == FULLY_COMPLETED_LABEL

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SchemeRecord":
        scheme_id = _as_id(d.get("scheme_id")) or ""
        status = d.get("fully_completion_scheme_status") or d.get("status")
        return cls(
            scheme_id=scheme_id,
            name=_name(d.get("scheme_name") or d.get("name") or scheme_id),
            region=_name(d.get("region")),
            region_id=_as_id(d.get("region_id")),
            completion_status=str(status) if status is not None else None,
            extra=dict(d),
        )


@dataclass
class VillageRecord:
    name: str
    scheme_id: str
    region: str = ""
    population: Optional[float] = None
    lpcd_readings: List[float] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def lpcd_average(self) -> Optional[float]:
        if not self.lpcd_readings:
            return None
        return sum(self.lpcd_readings) / len(self.lpcd_readings)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "VillageRecord":
        raw = d.get("lpcd_values")
        if raw is None:
            raw = [d.get(f"lpcd_value_day{i}") for i in range(1, LPCD_DAYS + 1)]
        elif not isinstance(raw, (list, tuple)):
            raw = []
        readings = [n for n in (as_number(v) for v in raw) if n is not None]
        return cls(
            name=_name(d.get("village_name") or d.get("name")),
            scheme_id=_as_id(d.get("scheme_id")) or "",
            region=_name(d.get("region")),
            population=as_number(d.get("population")),
            lpcd_readings=readings,
            extra=dict(d),
        )


Record = Union[Mapping[str, Any], RegionRecord, SchemeRecord, VillageRecord]


def _coerce(items: Optional[Iterable[Record]], cls) -> list:
    out = []
    for item in items or []:
        if isinstance(item, cls):
            out.append(item)
        elif isinstance(item, Mapping):
            out.append(cls.from_dict(item))
        else:
            logger.warning("Skipping malformed %s row: %r", cls.__name__, item)
    return out


def village_status(village: VillageRecord, config: SunburstConfig) -> Optional[Status]:
    """Classify a village by its average daily LPCD reading."""
    avg = village.lpcd_average
    if avg is None:
        return None
    if avg >= config.lpcd_threshold:
        return Status.GOOD
    if avg >= config.lpcd_warning_threshold:
        return Status.WARNING
    return Status.CRITICAL


class HierarchyBuilder:
    """
    Joins region, scheme and village rows into a rooted HierarchyNode tree.

    Schemes attach to regions by `region_id` when both sides carry one and by
    region display name otherwise. Villages attach to schemes by `scheme_id`,
    narrowed by region name when the village row has one. Name matching is a
    fallback: duplicate or renamed labels can misassign subtrees.
    """

    def __init__(self, config: Optional[SunburstConfig] = None):
        self.config = config or SunburstConfig()
        self.dropped: List[Tuple[str, str]] = []

    def _drop(self, what: str, label: str, reason: str) -> None:
        self.dropped.append((what, label))
        logger.warning("Dropping %s %r: %s", what, label, reason)

    def _join(
        self,
        regions: Sequence[RegionRecord],
        schemes: Sequence[SchemeRecord],
        villages: Sequence[VillageRecord],
    ) -> List[Tuple[RegionRecord, List[Tuple[SchemeRecord, List[VillageRecord]]]]]:
        # first row wins on duplicate ids and names alike
        by_id: Dict[str, RegionRecord] = {}
        by_name: Dict[str, RegionRecord] = {}
        for r in regions:
            if r.region_id is not None:
                by_id.setdefault(r.region_id, r)
            by_name.setdefault(r.name, r)

        region_schemes: Dict[int, List[SchemeRecord]] = {id(r): [] for r in regions}
        for s in schemes:
            region = by_id.get(s.region_id) if s.region_id is not None else None
            if region is None:
                region = by_name.get(s.region)
            if region is None:
                self._drop("scheme", s.name, f"no region named {s.region!r}")
                continue
            region_schemes[id(region)].append(s)

        attached = [s for r in regions for s in region_schemes[id(r)]]
        owner = {id(s): r.name for r in regions for s in region_schemes[id(r)]}
        schemes_by_id: Dict[str, List[SchemeRecord]] = {}
        for s in attached:
            schemes_by_id.setdefault(s.scheme_id, []).append(s)

        scheme_villages: Dict[int, List[VillageRecord]] = {id(s): [] for s in attached}
        for v in villages:
            candidates = schemes_by_id.get(v.scheme_id, [])
            if v.region:
                candidates = [s for s in candidates if owner[id(s)] == v.region]
            if not candidates:
                self._drop("village", v.name, f"no scheme {v.scheme_id!r} in region {v.region!r}")
                continue
            scheme_villages[id(candidates[0])].append(v)

        return [
            (r, [(s, scheme_villages[id(s)]) for s in region_schemes[id(r)]])
            for r in regions
        ]

    def build(
        self,
        regions: Iterable[Record],
        schemes: Iterable[Record],
        villages: Iterable[Record],
    ) -> HierarchyNode:
        """Build Root → Region → Scheme → Village."""
        cfg = self.config
        self.dropped = []
        joined = self._join(
            _coerce(regions, RegionRecord),
            _coerce(schemes, SchemeRecord),
            _coerce(villages, VillageRecord),
        )

        root = HierarchyNode(cfg.root_label, NodeKind.ROOT)
        for region, scheme_rows in joined:
            weight = region.total_schemes_integrated
            if weight is None:
                weight = float(len(scheme_rows))
            region_node = root.add(
                HierarchyNode(region.name, NodeKind.REGION, weight=max(0.0, weight), details=region.extra)
            )
            for scheme, village_rows in scheme_rows:
                scheme_node = region_node.add(
                    HierarchyNode(
                        scheme.name,
                        NodeKind.SCHEME,
                        weight=float(len(village_rows) or 1),
                        status=Status.COMPLETED if scheme.fully_completed else Status.PROGRESS,
                        details=scheme.extra,
                    )
                )
                for village in village_rows:
                    population = village.population
                    if population is None:
                        logger.debug("Village %r has no population, using %s", village.name, cfg.default_population)
                        population = cfg.default_population
                    details = dict(village.extra)
                    details["lpcd"] = village.lpcd_average
                    scheme_node.add(
                        HierarchyNode(
                            village.name,
                            NodeKind.VILLAGE,
                            weight=max(0.0, population),
                            status=village_status(village, cfg),
                            details=details,
                        )
                    )
        return root

    def build_status_rings(
        self,
        regions: Iterable[Record],
        schemes: Iterable[Record],
        villages: Iterable[Record],
    ) -> HierarchyNode:
        """Build Root → Region → completion category → LPCD category.

        Each completion bucket is weighted by its scheme count and each LPCD
        bucket by its village count. Empty buckets are left out.
        """
        cfg = self.config
        self.dropped = []
        joined = self._join(
            _coerce(regions, RegionRecord),
            _coerce(schemes, SchemeRecord),
            _coerce(villages, VillageRecord),
        )

        root = HierarchyNode(cfg.root_label, NodeKind.ROOT)
        for region, scheme_rows in joined:
            region_node = root.add(HierarchyNode(region.name, NodeKind.REGION, weight=float(len(scheme_rows))))
            buckets = (
                (Status.FULLY_COMPLETED, [row for row in scheme_rows if _completed(row[0])]),
                (Status.PARTIALLY_COMPLETED, [row for row in scheme_rows if not _completed(row[0])]),
            )
            for status, rows in buckets:
                if not rows:
                    continue
                bucket = region_node.add(
                    HierarchyNode(status.value, NodeKind.COMPLETION_CATEGORY, weight=float(len(rows)), status=status)
                )
                above = below = 0
                for _, village_rows in rows:
                    for v in village_rows:
                        avg = v.lpcd_average
                        if avg is not None and avg > cfg.lpcd_threshold:
                            above += 1
                        else:
                            below += 1
                for category, count in ((Category.ABOVE_LPCD, above), (Category.BELOW_LPCD, below)):
                    if count:
                        bucket.add(
                            HierarchyNode(
                                category.value,
                                NodeKind.LPCD_CATEGORY,
                                weight=float(count),
                                category=category,
                            )
                        )
        return root


def _completed(scheme: SchemeRecord) -> bool:
    return Status.parse(scheme.completion_status) in (Status.FULLY_COMPLETED, Status.COMPLETED)


def build_hierarchy(
    regions: Iterable[Record],
    schemes: Iterable[Record],
    villages: Iterable[Record],
    config: Optional[SunburstConfig] = None,
) -> HierarchyNode:
    return HierarchyBuilder(config).build(regions, schemes, villages)


def build_status_rings(
    regions: Iterable[Record],
    schemes: Iterable[Record],
    villages: Iterable[Record],
    config: Optional[SunburstConfig] = None,
) -> HierarchyNode:
    return HierarchyBuilder(config).build_status_rings(regions, schemes, villages)


_DEPTH_KINDS = (NodeKind.ROOT, NodeKind.REGION, NodeKind.SCHEME)


def hierarchy_from_dict(d: Mapping[str, Any], depth: int = 0) -> HierarchyNode:
    """Load the nested `{name, type, value, children, ...}` shape."""
    kind = NodeKind.parse(d.get("type"))
    if kind is None:
        kind = _DEPTH_KINDS[depth] if depth < len(_DEPTH_KINDS) else NodeKind.VILLAGE
        logger.debug("Node %r has unknown type %r, using %s", d.get("name"), d.get("type"), kind.value)

    weight = as_number(d.get("value"))
    if weight is None:
        weight = 1.0

    status = Status.parse(d.get("status"))
    if status is None and d.get("status") is not None:
        logger.debug("Unrecognised status %r on %r", d.get("status"), d.get("name"))
    category = Category.parse(d.get("category"))
    if category is None and d.get("category") is not None:
        logger.debug("Unrecognised category %r on %r", d.get("category"), d.get("name"))

    children = d.get("children") or []
    if not isinstance(children, (list, tuple)):
        logger.warning("Ignoring non-list children on %r", d.get("name"))
        children = []
    return HierarchyNode(
        name=_name(d.get("name")),
        kind=kind,
        weight=max(0.0, weight),
        status=status,
        category=category,
        color=d.get("color") or None,
        children=[hierarchy_from_dict(c, depth + 1) for c in children if isinstance(c, Mapping)],
        details={k: v for k, v in d.items() if k not in _NODE_KEYS},
    )


def load_dataset(data: Any, config: Optional[SunburstConfig] = None, *, rings: bool = False) -> HierarchyNode:
    """Accept either a nested hierarchy or a flat record bundle."""
    if isinstance(data, Mapping):
        if any(k in data for k in ("regions", "schemes", "villages")):
            for key in ("regions", "schemes", "villages"):
                if data.get(key) is not None and not isinstance(data[key], (list, tuple)):
                    raise SunzoomError(f"{key!r} must be a list of rows")
            builder = HierarchyBuilder(config)
            build = builder.build_status_rings if rings else builder.build
            return build(data.get("regions"), data.get("schemes"), data.get("villages"))
        if "name" in data:
            return hierarchy_from_dict(data)
    raise SunzoomError("dataset must be a nested hierarchy or a {regions, schemes, villages} bundle")
