"""
Catalog schemas for the learning graph.

Defines Pydantic models for the entities parsed out of the resource catalog:
- Difficulty levels and their integer weights
- Resources (one per catalog row)
- Modules (grouping of resources within an area)
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes with camelCase keys (the artifact format)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# Difficulty
# -----------------------------------------------------------------------------

class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


DIFFICULTY_WEIGHTS = {
    Difficulty.BEGINNER: 1,
    Difficulty.INTERMEDIATE: 2,
    Difficulty.ADVANCED: 3,
}


# -----------------------------------------------------------------------------
# Representative profiles
# -----------------------------------------------------------------------------

class SyntheticRepresentative(CamelModel):
    """Aggregated stand-in for a module's resources."""
    id: str
    average_difficulty: float = 0.0
    aggregated_tags: list[str] = []
    aggregated_prereq_module_ids: list[str] = []


class RepresentativeProfile(CamelModel):
    """
    Per-module, per-strategy summary.

    Either points at one resource (type="resource", resource_id set) or
    carries a synthetic aggregate (type="synthetic", synthetic set).
    """
    type: str = Field(..., pattern=r'^(resource|synthetic)$')
    label: str
    summary: str
    resource_id: str | None = None
    synthetic: SyntheticRepresentative | None = None


# -----------------------------------------------------------------------------
# Entities
# -----------------------------------------------------------------------------

class Resource(CamelModel):
    """A single learning item, built from one catalog row."""
    id: str
    name: str
    link: str = ""
    area: str
    module_id: str
    module_name: str
    type: str = ""
    difficulty: Difficulty
    difficulty_weight: int = Field(..., ge=1, le=3)
    tag_paths: list[list[str]] = []
    flat_tags: list[str] = []           # every prefix of every tag path
    prerequisite_module_ids: list[str] = []
    tag_prerequisite_paths: list[list[str]] = []


class ModuleNode(CamelModel):
    """
    A module in the prerequisite graph.

    resource_ids, flat_tags and tag_paths grow while rows are ingested;
    prerequisites, closure and profiles are filled once ingestion is done.
    """
    id: str
    name: str
    area: str
    flat_tags: list[str] = []
    tag_paths: list[list[str]] = []
    resource_ids: list[str] = []
    prerequisite_module_ids: list[str] = []
    representative_profiles: dict[str, RepresentativeProfile] = {}
    closure_prerequisites: list[str] = []
    closure_order: int = -1
