# roadnav/domain/routing/directions.py
import re
from dataclasses import dataclass
from enum import IntEnum

from roadnav.domain.errors import MalformedInstructionText, NoSharedWay
from roadnav.domain.geodesy import relative_bearing_deg
from roadnav.domain.graph import UNKNOWN_ROAD, RoadGraph


class Direction(IntEnum):
    START = 0
    STRAIGHT = 1
    SLIGHT_LEFT = 2
    SLIGHT_RIGHT = 3
    RIGHT = 4
    LEFT = 5
    SHARP_LEFT = 6
    SHARP_RIGHT = 7

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "Direction | None":
        return _BY_LABEL.get(label)

    @classmethod
    def classify(cls, relative_bearing: float) -> "Direction":
        if relative_bearing < -100:
            return cls.SHARP_LEFT
        if relative_bearing < -30:
            return cls.LEFT
        if relative_bearing < -15:
            return cls.SLIGHT_LEFT
        if relative_bearing < 15:
            return cls.STRAIGHT
        if relative_bearing < 30:
            return cls.SLIGHT_RIGHT
        if relative_bearing < 100:
            return cls.RIGHT
        return cls.SHARP_RIGHT


_LABELS = {
    Direction.START: "Start",
    Direction.STRAIGHT: "Go straight",
    Direction.SLIGHT_LEFT: "Slight left",
    Direction.SLIGHT_RIGHT: "Slight right",
    Direction.RIGHT: "Turn right",
    Direction.LEFT: "Turn left",
    Direction.SHARP_LEFT: "Sharp left",
    Direction.SHARP_RIGHT: "Sharp right",
}
_BY_LABEL = {label: d for d, label in _LABELS.items()}

_INSTRUCTION_RE = re.compile(
    r"(?P<direction>" + "|".join(re.escape(s) for s in _BY_LABEL) + r")"
    r" on (?P<way>.*) and continue for (?P<distance>\d+\.\d{3}) miles\.",
    re.DOTALL,
)


@dataclass(frozen=True)
class NavigationDirection:
    direction: Direction = Direction.STRAIGHT
    way: str = UNKNOWN_ROAD
    distance: float = 0.0  # miles

    def __str__(self) -> str:
        return f"{self.direction.label} on {self.way} and continue for {self.distance:.3f} miles."

    @classmethod
    def from_string(cls, text: str) -> "NavigationDirection | None":
        """Parse the rendered form back; None if `text` is not exactly that form."""
        m = _INSTRUCTION_RE.fullmatch(text)
        if m is None:
            return None
        return cls(
            Direction.from_label(m.group("direction")),
            m.group("way"),
            float(m.group("distance")),
        )

    @classmethod
    def parse(cls, text: str) -> "NavigationDirection":
        nd = cls.from_string(text)
        if nd is None:
            raise MalformedInstructionText(text)
        return nd


def route_directions(graph: RoadGraph, path: list[int]) -> list[NavigationDirection]:
    """
    Collapse a vertex path into one instruction per contiguous run of the same
    way. The first run is always START; later runs are classified by the turn
    between the last edge of the previous run and the first edge of the new one.
    """
    out: list[NavigationDirection] = []
    direction: Direction | None = None
    way = ""
    dist = 0.0
    prev_bearing = 0.0

    for curr, nxt in zip(path, path[1:]):
        name = graph.way_name(curr, nxt)
        if name is None:
            raise NoSharedWay(curr, nxt)
        bearing = graph.bearing(curr, nxt)
        leg = graph.distance(curr, nxt)

        if direction is not None and name == way:
            dist += leg
        elif direction is None:
            direction, way, dist = Direction.START, name, leg
        else:
            out.append(NavigationDirection(direction, way, dist))
            direction = Direction.classify(relative_bearing_deg(bearing, prev_bearing))
            way, dist = name, leg
        prev_bearing = bearing

    if direction is not None:
        out.append(NavigationDirection(direction, way, dist))
    return out
