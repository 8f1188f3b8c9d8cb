"""Graph view helpers for serving the compiled artifact."""

from .graph_view import (
    GraphStrategy,
    GraphNode,
    GraphLink,
    GraphViewModel,
    ScoredResource,
    normalize_strategy,
    pick_representative_profile,
    to_view_model,
    similarity_score,
    derive_representative_resource,
    scored_resources_for_module,
)

__all__ = [
    "GraphStrategy",
    "GraphNode",
    "GraphLink",
    "GraphViewModel",
    "ScoredResource",
    "normalize_strategy",
    "pick_representative_profile",
    "to_view_model",
    "similarity_score",
    "derive_representative_resource",
    "scored_resources_for_module",
]
