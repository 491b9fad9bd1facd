"""
Algorithm configuration parameters.

Modify these values to tune routing behavior.
"""

from pydantic import BaseModel, Field


class AlgorithmConfig(BaseModel):
    """Configuration for route requests."""

    # Strategy used when a request does not name one
    default_algorithm: str = Field(
        default="dijkstra",
        description="Strategy used when the request omits 'algo'.",
    )

    # The visited-edge trace can be large on city graphs; clients that only
    # want the route can switch it off
    include_visited_edges: bool = Field(
        default=True,
        description="Include the visited-edge trace in route responses.",
    )

    # Comparison marks a strategy optimal when its distance is within
    # this fraction of Dijkstra's
    optimal_tolerance: float = Field(
        default=0.001,
        ge=0.0,
        le=1.0,
        description="Relative tolerance against Dijkstra's distance in /api/route/compare.",
    )


# Global config instance - can be modified at runtime
_config = AlgorithmConfig()


def get_config() -> AlgorithmConfig:
    """Get current algorithm configuration."""
    return _config


def update_config(**kwargs) -> AlgorithmConfig:
    """Update configuration parameters."""
    global _config
    _config = AlgorithmConfig(**{**_config.model_dump(), **kwargs})
    return _config


def reset_config() -> AlgorithmConfig:
    """Reset configuration to defaults."""
    global _config
    _config = AlgorithmConfig()
    return _config
