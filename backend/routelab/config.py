import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_GRAPH_PATH = BASE_DIR / "data" / "sample_graph.json"


class Settings(BaseModel):
    graph_path: Path = DEFAULT_GRAPH_PATH
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    graph_path = os.environ.get("ROUTELAB_GRAPH_PATH")
    if graph_path:
        return Settings(graph_path=Path(graph_path))
    return Settings()
