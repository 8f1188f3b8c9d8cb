"""
Graph view - turn a compiled payload into the nodes/links view model.

Provides:
- Strategy selection (representative -> minPrereqs, closure -> aggregated)
- Node and link derivation for the visualization layer
- Representative resource lookup and similarity ranking within a module
"""

from enum import Enum
from typing import Optional

from learngraph.pipeline.representative import (
    STRATEGY_AGGREGATED,
    STRATEGY_MIN_PREREQS,
    module_resources,
)
from learngraph.schemas import (
    DIFFICULTY_WEIGHTS,
    CamelModel,
    GraphPayload,
    ModuleNode,
    RepresentativeProfile,
    Resource,
    TagTreeNodeExport,
)


class GraphStrategy(str, Enum):
    """Which representative profile the view shows per module."""
    REPRESENTATIVE = "representative"   # minPrereqs pick
    CLOSURE = "closure"                 # aggregated profile


STRATEGY_PROFILES = {
    GraphStrategy.REPRESENTATIVE: STRATEGY_MIN_PREREQS,
    GraphStrategy.CLOSURE: STRATEGY_AGGREGATED,
}


class GraphNode(CamelModel):
    id: str
    name: str
    area: str
    size: int
    closure_order: int
    representative_profile: Optional[RepresentativeProfile] = None


class GraphLink(CamelModel):
    source: str     # dependent module
    target: str     # prerequisite module


class GraphViewModel(CamelModel):
    nodes: list[GraphNode]
    links: list[GraphLink]
    modules: dict[str, ModuleNode]
    resources: dict[str, Resource]
    tag_tree: TagTreeNodeExport
    module_order: list[str]
    strategy: GraphStrategy


class ScoredResource(CamelModel):
    resource: Resource
    similarity: int


def normalize_strategy(value: Optional[str]) -> GraphStrategy:
    """Anything other than 'closure' selects the representative strategy."""
    if value == GraphStrategy.CLOSURE.value:
        return GraphStrategy.CLOSURE
    return GraphStrategy.REPRESENTATIVE


def node_size(module: ModuleNode) -> int:
    return max(4, len(module.resource_ids) * 4 + 8)


def pick_representative_profile(
    module: ModuleNode,
    strategy: GraphStrategy
) -> Optional[RepresentativeProfile]:
    profile_key = STRATEGY_PROFILES.get(strategy)
    if profile_key is None:
        return None
    return module.representative_profiles.get(profile_key)


def to_view_model(payload: GraphPayload, strategy: GraphStrategy) -> GraphViewModel:
    """Build nodes (one per module) and links (module -> prerequisite)."""
    nodes = [
        GraphNode(
            id=module.id,
            name=module.name,
            area=module.area,
            size=node_size(module),
            closure_order=module.closure_order,
            representative_profile=pick_representative_profile(module, strategy),
        )
        for module in payload.modules
    ]
    links = [
        GraphLink(source=module.id, target=prereq_id)
        for module in payload.modules
        for prereq_id in module.prerequisite_module_ids
    ]
    return GraphViewModel(
        nodes=nodes,
        links=links,
        modules={m.id: m for m in payload.modules},
        resources={r.id: r for r in payload.resources},
        tag_tree=payload.tag_tree,
        module_order=payload.module_order,
        strategy=strategy,
    )


# -----------------------------------------------------------------------------
# Resource ranking
# -----------------------------------------------------------------------------

def _overlap_count(left: list[str], right: list[str]) -> int:
    if not left or not right:
        return 0
    right_set = set(right)
    return sum(1 for token in left if token in right_set)


def similarity_score(base: Resource, candidate: Resource) -> int:
    """Shared tags count double, shared prerequisites once, minus the difficulty gap."""
    shared_tags = _overlap_count(base.flat_tags, candidate.flat_tags)
    shared_prereqs = _overlap_count(base.prerequisite_module_ids, candidate.prerequisite_module_ids)
    difficulty_gap = abs(DIFFICULTY_WEIGHTS[base.difficulty] - DIFFICULTY_WEIGHTS[candidate.difficulty])
    return shared_tags * 2 + shared_prereqs - difficulty_gap


def derive_representative_resource(
    module: ModuleNode,
    resources: dict[str, Resource],
    strategy: GraphStrategy
) -> Optional[Resource]:
    """
    Concrete resource behind a module's profile for the given strategy.

    Resource profiles point straight at their resource. For synthetic
    profiles, prefer the hardest resource, then the one sharing the most
    aggregated tags, then by name.
    """
    profile = pick_representative_profile(module, strategy)
    if profile is None:
        return None
    if profile.type == "resource" and profile.resource_id:
        return resources.get(profile.resource_id)
    if profile.type == "synthetic" and profile.synthetic is not None:
        aggregated_tags = profile.synthetic.aggregated_tags
        candidates = module_resources(module, resources)
        if not candidates:
            return None
        return min(
            candidates,
            key=lambda r: (
                -DIFFICULTY_WEIGHTS[r.difficulty],
                -_overlap_count(r.flat_tags, aggregated_tags),
                r.name,
            ),
        )
    return None


def scored_resources_for_module(
    module: ModuleNode,
    resources: dict[str, Resource],
    strategy: GraphStrategy
) -> list[ScoredResource]:
    """Module resources ranked by similarity to its representative."""
    representative = derive_representative_resource(module, resources, strategy)
    scored = [
        ScoredResource(
            resource=resource,
            similarity=similarity_score(representative, resource) if representative else 0,
        )
        for resource in module_resources(module, resources)
    ]
    scored.sort(key=lambda item: (-item.similarity, item.resource.name))
    return scored
