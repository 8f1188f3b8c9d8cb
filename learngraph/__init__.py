"""
learngraph - compile a learning resource catalog into a module prerequisite graph.

Subpackages:
- schemas: Pydantic models for modules, resources, tag tree and payload
- pipeline: ingestion, resolution, ordering, closures, representatives
- viewer: strategy-specific view model over a compiled payload
"""

__version__ = "0.1.0"
