import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1000, ge=1)


# ----------------- NETWORK RECORDS ---------------------


class VertexModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    lon: float = Field(ge=-180.0, le=180.0)
    lat: float = Field(ge=-90.0, le=90.0)
    name: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class WayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    nodes: list[int] = Field(min_length=1)
    name: str | None = None


class NetworkModel(BaseModel):
    """Output of the ingestion step: navigable vertices and road ways."""

    model_config = ConfigDict(extra="forbid")
    vertices: list[VertexModel] = Field(default_factory=list)
    ways: list[WayModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_refs(self):
        ids: set[int] = set()
        for v in self.vertices:
            if v.id in ids:
                raise ValueError(f"duplicate vertex id {v.id}")
            ids.add(v.id)
        for w in self.ways:
            missing = [n for n in w.nodes if n not in ids]
            if missing:
                raise ValueError(f"way {w.id} references unknown vertices {missing[:5]}")
        return self


class NetworkByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["json", "pickle"] = "json"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class NetworkInline(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    network: NetworkModel


NetworkRef = Annotated[NetworkByPath | NetworkInline, Field(discriminator="by")]

# ----------------- SPATIAL INDEX ---------------------


class KdTreeIndexModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["kdtree"] = "kdtree"
    # "degrees" keeps the legacy degrees-vs-miles prune test
    prune: Literal["haversine", "degrees"] = "haversine"


IndexUnion = KdTreeIndexModel

# ----------------- ROUTER ---------------------


class AStarRouterModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["astar"] = "astar"
    heuristic: Literal["great_circle", "zero"] = "great_circle"


RouterUnion = AStarRouterModel


# ------------------------------------------------------------------


class ServiceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "roadnav"
    run_id: str = "local"
    network: NetworkRef
    index: IndexUnion = Field(default_factory=KdTreeIndexModel)
    router: RouterUnion = Field(default_factory=AStarRouterModel)
    log: LogModel = LogModel()
