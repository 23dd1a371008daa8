# roadnav/runtime/resources.py
import os
import pickle
from functools import lru_cache

from roadnav.config.models import NetworkModel


def network_file_exists(file: str) -> bool:
    # checked outside the cache so a missing file is looked up again next time
    return os.path.exists(file)


@lru_cache(maxsize=8)
def load_network_from_path(file: str, fmt: str) -> NetworkModel:
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            return NetworkModel.model_validate_json(f.read())
    if fmt == "pickle":
        with open(file, "rb") as f:
            obj = pickle.load(f)
        return obj if isinstance(obj, NetworkModel) else NetworkModel.model_validate(obj)
    raise ValueError(f"Unsupported network fmt {fmt!r}")
