# runtime/registries.py
from collections.abc import Callable
from typing import Any

from roadnav.app.protocols import Heuristic, SpatialIndex
from roadnav.config.models import (
    IndexUnion,
    KdTreeIndexModel,
    NetworkByPath,
    NetworkInline,
    NetworkModel,
    NetworkRef,
)
from roadnav.domain.graph import RoadGraph
from roadnav.domain.routing.pathfinder import great_circle_heuristic, zero_heuristic
from roadnav.domain.spatial.kdtree import KdTree, PruneBound, degrees_bound, haversine_bound
from roadnav.runtime.resources import load_network_from_path, network_file_exists

IndexFactory = Callable[[IndexUnion, dict], SpatialIndex]

_heuristic_registry: dict[str, Heuristic] = {}
_prune_registry: dict[str, PruneBound] = {}
_index_registry: dict[str, IndexFactory] = {}


# ------------------- Heuristics ---------------------------


def register_heuristic(name: str):
    def deco(fn: Heuristic):
        _heuristic_registry[name] = fn
        return fn

    return deco


def make_heuristic(name: str) -> Heuristic:
    try:
        return _heuristic_registry[name]
    except KeyError:
        raise ValueError(f"Unknown heuristic {name!r}") from None


register_heuristic("great_circle")(great_circle_heuristic)
register_heuristic("zero")(zero_heuristic)


# ------------------- k-d prune bounds ---------------------------


def register_prune_bound(name: str):
    def deco(fn: PruneBound):
        _prune_registry[name] = fn
        return fn

    return deco


def make_prune_bound(name: str) -> PruneBound:
    try:
        return _prune_registry[name]
    except KeyError:
        raise ValueError(f"Unknown prune bound {name!r}") from None


register_prune_bound("haversine")(haversine_bound)
register_prune_bound("degrees")(degrees_bound)


# ------------------- Spatial indexes ---------------------------


def register_index(kind: str):
    def deco(fn: IndexFactory):
        _index_registry[kind] = fn
        return fn

    return deco


def make_index(cfg: IndexUnion, *, deps: dict[str, Any]) -> SpatialIndex:
    try:
        factory = _index_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown index kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_index("kdtree")
def _make_kdtree(cfg: KdTreeIndexModel, deps):
    graph: RoadGraph = deps["graph"]
    return KdTree.build(graph.iter_vertices(), make_prune_bound(cfg.prune))


# ------------------- Network resolution ---------------------------


def resolve_network(ref: NetworkRef) -> NetworkModel:
    if isinstance(ref, NetworkInline):
        return ref.network
    if isinstance(ref, NetworkByPath):
        if not network_file_exists(ref.file):
            if ref.must_exist:
                raise FileNotFoundError(ref.file)
            return NetworkModel()
        return load_network_from_path(ref.file, ref.fmt)
    raise TypeError(ref)
