# roadnav/domain/errors.py


class RoadNavError(Exception):
    """Base class for recoverable query failures."""


class VertexNotFound(RoadNavError, KeyError):
    def __init__(self, vid):
        super().__init__(vid)
        self.vid = vid

    def __str__(self) -> str:
        return f"unknown vertex {self.vid!r}"


class WayNotFound(RoadNavError, KeyError):
    def __init__(self, way_id):
        super().__init__(way_id)
        self.way_id = way_id

    def __str__(self) -> str:
        return f"unknown way {self.way_id!r}"


class EmptyIndex(RoadNavError, LookupError):
    pass


class Unreachable(RoadNavError):
    def __init__(self, start: int, dest: int):
        super().__init__(f"no path from {start} to {dest}")
        self.start, self.dest = start, dest


class NoSharedWay(RoadNavError, LookupError):
    def __init__(self, v: int, w: int):
        super().__init__(f"vertices {v} and {w} share no way")
        self.v, self.w = v, w


class MalformedInstructionText(RoadNavError, ValueError):
    def __init__(self, text: str):
        super().__init__(f"not a navigation instruction: {text!r}")
        self.text = text
