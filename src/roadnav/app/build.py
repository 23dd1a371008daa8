# roadnav/app/build.py
import time
from collections.abc import Mapping
from dataclasses import dataclass

from roadnav.app.protocols import SpatialIndex
from roadnav.config.models import NetworkModel, ServiceModel
from roadnav.domain.entities.geography import Place, Way
from roadnav.domain.graph import RoadGraph
from roadnav.domain.places import PlaceIndex
from roadnav.domain.routing.hooks import NoopHooks, SearchHooks
from roadnav.domain.routing.pathfinder import Pathfinder
from roadnav.io.query_logging import QueryLogging
from roadnav.runtime.registries import make_heuristic, make_index, resolve_network
from roadnav.services.navigator import Navigator


@dataclass
class App:
    graph: RoadGraph
    index: SpatialIndex
    places: PlaceIndex
    navigator: Navigator
    hooks: SearchHooks


def build_graph(network: NetworkModel) -> tuple[RoadGraph, int]:
    """Load vertex/way records into a graph and prune it. Returns (graph, pruned)."""
    g = RoadGraph()
    for v in network.vertices:
        g.add_vertex(v.id, v.lon, v.lat, v.name)
    for w in network.ways:
        g.add_way(Way(w.id, tuple(w.nodes), w.name))
    return g, g.prune()


def build_places(network: NetworkModel) -> PlaceIndex:
    # taken from the records, so named points without road edges stay searchable
    return PlaceIndex(Place(v.id, v.lon, v.lat, v.name) for v in network.vertices if v.name)


def build(cfg: ServiceModel | Mapping, *, use_logging: bool = True, hooks=None) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ServiceModel) else ServiceModel.model_validate(cfg)

    if hooks is None:
        hooks = (
            QueryLogging(
                run_id=model.run_id,
                level=model.log.level,
                debug=model.log.debug,
                sample_every=model.log.sample_every,
            )
            if use_logging
            else NoopHooks()
        )

    # 1) Graph + names, strictly before any query
    t0 = time.perf_counter()
    network = resolve_network(model.network)
    graph, pruned = build_graph(network)
    places = build_places(network)

    # 2) Spatial index over the pruned vertices
    index = make_index(model.index, deps={"graph": graph})
    hooks.build_done(
        vertices=len(graph),
        pruned=pruned,
        ways=len(network.ways),
        ms=(time.perf_counter() - t0) * 1000,
    )

    # 3) Router
    pathfinder = Pathfinder(graph, index, make_heuristic(model.router.heuristic), hooks=hooks)
    navigator = Navigator(graph, index, pathfinder, places, hooks=hooks)
    return App(graph, index, places, navigator, hooks)
