"""
Learning graph schemas - Pydantic models for the compiled module graph.

This module exports all schema classes for:
- Catalog: difficulty levels, resources, modules, representative profiles
- Graph: tag tree and the compiled graph payload
"""

# Catalog schemas
from .catalog import (
    CamelModel,
    Difficulty,
    DIFFICULTY_WEIGHTS,
    SyntheticRepresentative,
    RepresentativeProfile,
    Resource,
    ModuleNode,
)

# Graph schemas
from .graph import (
    TagTreeNode,
    TagTreeNodeExport,
    GraphPayload,
)

__all__ = [
    # Catalog
    'CamelModel',
    'Difficulty',
    'DIFFICULTY_WEIGHTS',
    'SyntheticRepresentative',
    'RepresentativeProfile',
    'Resource',
    'ModuleNode',
    # Graph
    'TagTreeNode',
    'TagTreeNodeExport',
    'GraphPayload',
]
