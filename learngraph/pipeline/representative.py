"""
Representative selector - per-module summaries under two strategies.

- minPrereqs: the owned resource with the fewest prerequisite modules, then
  the lowest difficulty weight, then the alphabetically first name.
- aggregated: a synthetic profile averaging difficulty and merging tags and
  prerequisites across every owned resource.
"""

import logging

from learngraph.schemas import (
    ModuleNode,
    RepresentativeProfile,
    Resource,
    SyntheticRepresentative,
)

logger = logging.getLogger(__name__)

STRATEGY_MIN_PREREQS = "minPrereqs"
STRATEGY_AGGREGATED = "aggregated"


def _synthetic_id(module: ModuleNode) -> str:
    return f"synthetic-{module.id}"


def _empty_synthetic(module: ModuleNode) -> SyntheticRepresentative:
    return SyntheticRepresentative(id=_synthetic_id(module))


def module_resources(module: ModuleNode, resources_by_id: dict[str, Resource]) -> list[Resource]:
    """Owned resources in the module's insertion order, skipping unknown ids."""
    return [resources_by_id[rid] for rid in module.resource_ids if rid in resources_by_id]


def min_prereqs_key(resource: Resource) -> tuple[int, int, str]:
    return (len(resource.prerequisite_module_ids), resource.difficulty_weight, resource.name)


def select_min_prereqs(module: ModuleNode, resources: list[Resource]) -> RepresentativeProfile:
    """Pick the simplest resource to stand in for the module."""
    if not resources:
        return RepresentativeProfile(
            type="synthetic",
            label="Unavailable",
            summary="No resources available for representative selection.",
            synthetic=_empty_synthetic(module),
        )

    resource = min(resources, key=min_prereqs_key)
    return RepresentativeProfile(
        type="resource",
        label=resource.name,
        summary=(
            f"Selected by minPrereqs strategy with "
            f"{len(resource.prerequisite_module_ids)} prerequisite modules."
        ),
        resource_id=resource.id,
    )


def build_aggregate_profile(module: ModuleNode, resources: list[Resource]) -> RepresentativeProfile:
    """Summarize every owned resource into one synthetic profile."""
    if not resources:
        return RepresentativeProfile(
            type="synthetic",
            label="Aggregate",
            summary="No resources to aggregate.",
            synthetic=_empty_synthetic(module),
        )

    tags: dict[str, None] = {}
    prereqs: dict[str, None] = {}
    total_difficulty = 0
    for resource in resources:
        tags.update(dict.fromkeys(resource.flat_tags))
        prereqs.update(dict.fromkeys(resource.prerequisite_module_ids))
        total_difficulty += resource.difficulty_weight

    return RepresentativeProfile(
        type="synthetic",
        label=f"{module.name} Aggregate",
        summary="Synthetic representative aggregating all module resources.",
        synthetic=SyntheticRepresentative(
            id=_synthetic_id(module),
            average_difficulty=total_difficulty / len(resources),
            aggregated_tags=list(tags),
            aggregated_prereq_module_ids=list(prereqs),
        ),
    )


def assign_representatives(modules: dict[str, ModuleNode], resources: list[Resource]) -> None:
    """Store both strategy profiles on every module (idempotent)."""
    resources_by_id: dict[str, Resource] = {}
    for resource in resources:
        resources_by_id.setdefault(resource.id, resource)

    unavailable = 0
    for module in modules.values():
        owned = module_resources(module, resources_by_id)
        if not owned:
            unavailable += 1
        module.representative_profiles = {
            STRATEGY_MIN_PREREQS: select_min_prereqs(module, owned),
            STRATEGY_AGGREGATED: build_aggregate_profile(module, owned),
        }

    logger.info(
        f"Selected representatives for {len(modules)} modules "
        f"({unavailable} without resources)"
    )
