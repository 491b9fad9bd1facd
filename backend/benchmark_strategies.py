import sys
import os
import time

import numpy as np
import pandas as pd

# Ensure current dir (backend) is in path
sys.path.append(os.getcwd())

from routelab.graph_loader import get_graph_data
from routelab.algorithms import list_all
from routelab.services.routing_service import run_search


def benchmark(n_trips: int = 50, seed: int = 42) -> pd.DataFrame:
    print("Loading graph...", flush=True)
    t0 = time.time()
    graph_data = get_graph_data()
    graph_data.ensure_loaded()
    print(f"Graph loaded in {time.time() - t0:.2f}s. Nodes: {graph_data.num_nodes}", flush=True)

    rng = np.random.default_rng(seed)  # Seed for reproducibility
    sources = rng.integers(0, graph_data.num_nodes, size=n_trips)
    targets = rng.integers(0, graph_data.num_nodes, size=n_trips)

    rows = []
    for s, t in zip(sources, targets):
        for name in list_all():
            result, runtime_ms = run_search(graph_data, name, int(s), int(t))
            rows.append({
                "algorithm": name,
                "source": int(s),
                "target": int(t),
                "found": result.found,
                "distance_m": result.cost,
                "visited_nodes": result.visited,
                "runtime_ms": runtime_ms,
            })

    df = pd.DataFrame(rows)
    # Excess distance over Dijkstra on the same pair
    baseline = df[df["algorithm"] == "dijkstra"].set_index(["source", "target"])["distance_m"]
    baseline = baseline[~baseline.index.duplicated()]
    df["excess_ratio"] = df.apply(
        lambda r: r["distance_m"] / baseline.loc[(r["source"], r["target"])] - 1.0
        if r["found"] and baseline.loc[(r["source"], r["target"])] else np.nan,
        axis=1,
    )
    return df


if __name__ == "__main__":
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 50
    df = benchmark(n)
    summary = df.groupby("algorithm", sort=False).agg(
        found=("found", "mean"),
        mean_visited=("visited_nodes", "mean"),
        mean_runtime_ms=("runtime_ms", "mean"),
        mean_excess=("excess_ratio", "mean"),
    )
    print(summary.to_string(), flush=True)
