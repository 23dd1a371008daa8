# tests/app/test_build_and_run.py
import json
import pickle

import pytest
from pydantic import ValidationError

from roadnav.app.build import build
from roadnav.config.models import NetworkModel
from roadnav.domain.errors import EmptyIndex, Unreachable
from roadnav.domain.routing.directions import Direction


def _network():
    return {
        "vertices": [
            {"id": 1, "lon": 0.0, "lat": 0.0},
            {"id": 2, "lon": 0.0, "lat": 1.0},
            {"id": 3, "lon": 1.0, "lat": 1.0},
            {"id": 4, "lon": 1.0, "lat": 0.0},
            {"id": 5, "lon": 0.5, "lat": 0.5, "name": "Town Hall"},
            {"id": 6, "lon": 3.0, "lat": 3.0},
            {"id": 7, "lon": 3.0, "lat": 3.1, "name": "  "},
        ],
        "ways": [
            {"id": 10, "nodes": [1, 2, 3, 4], "name": "Main St"},
            {"id": 11, "nodes": [6, 7]},
        ],
    }


def _cfg(**over):
    cfg = {"name": "test", "run_id": "t-1", "network": {"by": "inline", "network": _network()}}
    cfg.update(over)
    return cfg


def test_build_routes_main_st():
    app = build(_cfg(), use_logging=False)
    route = app.navigator.route(0.0, 0.0, 1.0, 0.0)
    assert route.path == [1, 2, 3, 4]
    assert len(route.directions) == 1
    assert route.directions[0].direction is Direction.START
    assert route.lines() == [f"Start on Main St and continue for {route.distance_mi:.3f} miles."]


def test_build_prunes_but_keeps_named_places():
    app = build(_cfg(), use_logging=False)
    assert 5 not in app.graph  # no road touches the town hall
    assert all(app.graph.adjacent(v) for v in app.graph.vertices())
    assert app.navigator.complete("town") == ["Town Hall"]
    (place,) = app.navigator.locations("town hall")
    assert (place.id, place.lon, place.lat) == (5, 0.5, 0.5)
    # snapping only ever lands on road vertices
    assert app.navigator.closest(0.5, 0.5) in {1, 2, 3, 4}


def test_unnamed_way_is_reported_as_unknown_road():
    app = build(_cfg(), use_logging=False)
    route = app.navigator.route(3.0, 3.0, 3.0, 3.1)
    assert [d.way for d in route.directions] == ["unknown road"]


def test_disconnected_query_raises():
    app = build(_cfg(), use_logging=False)
    with pytest.raises(Unreachable):
        app.navigator.route(0.0, 0.0, 3.0, 3.0)


@pytest.mark.parametrize("heuristic", ["great_circle", "zero"])
@pytest.mark.parametrize("prune", ["haversine", "degrees"])
def test_registry_choices(heuristic, prune):
    app = build(
        _cfg(router={"kind": "astar", "heuristic": heuristic}, index={"prune": prune}),
        use_logging=False,
    )
    assert app.navigator.shortest_path(0.0, 0.0, 1.0, 0.0) == [1, 2, 3, 4]


def test_network_from_json_file(tmp_path):
    path = tmp_path / "network.json"
    path.write_text(json.dumps(_network()), encoding="utf-8")
    app = build(_cfg(network={"by": "path", "file": str(path)}), use_logging=False)
    assert sorted(app.graph.vertices()) == [1, 2, 3, 4, 6, 7]


@pytest.mark.parametrize(
    "payload",
    [lambda: NetworkModel.model_validate(_network()), _network],
    ids=["model", "dict"],
)
def test_network_from_pickle_file(tmp_path, payload):
    path = tmp_path / "network.pkl"
    path.write_bytes(pickle.dumps(payload()))
    app = build(
        _cfg(network={"by": "path", "file": str(path), "fmt": "pickle"}), use_logging=False
    )
    assert sorted(app.graph.vertices()) == [1, 2, 3, 4, 6, 7]
    assert app.navigator.shortest_path(0.0, 0.0, 1.0, 0.0) == [1, 2, 3, 4]


def test_missing_network_file(tmp_path):
    missing = str(tmp_path / "nope.json")
    with pytest.raises(FileNotFoundError):
        build(_cfg(network={"by": "path", "file": missing}), use_logging=False)
    app = build(
        _cfg(network={"by": "path", "file": missing, "must_exist": False}), use_logging=False
    )
    with pytest.raises(EmptyIndex):
        app.navigator.closest(0.0, 0.0)


def test_network_file_created_after_a_miss_is_loaded(tmp_path):
    path = tmp_path / "late.json"
    cfg = _cfg(network={"by": "path", "file": str(path)})
    with pytest.raises(FileNotFoundError):
        build(cfg, use_logging=False)
    path.write_text(json.dumps(_network()), encoding="utf-8")
    app = build(cfg, use_logging=False)
    assert sorted(app.graph.vertices()) == [1, 2, 3, 4, 6, 7]


@pytest.mark.parametrize(
    "patch",
    [
        lambda n: n["ways"].append({"id": 12, "nodes": [1, 99]}),
        lambda n: n["vertices"].append({"id": 1, "lon": 0.0, "lat": 0.0}),
        lambda n: n["vertices"].append({"id": 8, "lon": 200.0, "lat": 0.0}),
        lambda n: n["ways"].append({"id": 13, "nodes": []}),
    ],
)
def test_invalid_networks_are_rejected(patch):
    net = _network()
    patch(net)
    with pytest.raises(ValidationError):
        build(_cfg(network={"by": "inline", "network": net}), use_logging=False)


def test_unknown_config_keys_are_rejected():
    with pytest.raises(ValidationError):
        build(_cfg(index={"prune": "manhattan"}), use_logging=False)
    with pytest.raises(ValidationError):
        build(_cfg(extra_key=1), use_logging=False)
