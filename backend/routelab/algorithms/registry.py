"""
Function registry for search strategies.

Usage:
    @register("strategy_name", optimal=True, traced=True)
    def solve(graph, source, target):
        return SearchResult(...)

``optimal`` marks strategies guaranteed to return a least-cost path;
``traced`` marks those that record a visited-edge trace.
"""

# Global registry, in registration order
_ALGORITHMS = {}
_DETAILS = {}


def register(name: str, *, optimal: bool = False, traced: bool = False):
    """Register a search strategy."""
    def decorator(func):
        _ALGORITHMS[name] = func
        _DETAILS[name] = {"name": name, "optimal": optimal, "traced": traced}
        print(f"[REGISTRY] Registered: {name}")
        return func
    return decorator


def get(name: str):
    """Get a strategy by name."""
    if name not in _ALGORITHMS:
        available = ", ".join(_ALGORITHMS.keys())
        raise ValueError(f"Algorithm '{name}' not found. Available: {available}")
    return _ALGORITHMS[name]


def list_all():
    """List all registered strategy names."""
    return list(_ALGORITHMS.keys())


def describe_all():
    """Registration details for every strategy, in registration order."""
    return [dict(_DETAILS[name]) for name in _ALGORITHMS]
