"""
Learning graph pipeline - compile a resource catalog into the module graph.

This module provides:
- Row ingestion and field parsing
- Entity resolution (modules, resources, tag tree)
- Prerequisite derivation, topological order and closures
- Representative selection and serialization
"""

from .fields import (
    slugify,
    split_multi_field,
    parse_hierarchy_field,
)

from .ingest import (
    CATALOG_COLUMNS,
    missing_columns,
    parse_rows,
    read_rows,
)

from .resolver import (
    BuildContext,
    ResolvedCatalog,
    resolve_entities,
)

from .dependencies import (
    PrerequisiteCycleError,
    derive_module_prerequisites,
    topological_order,
)

from .closure import (
    ClosureCalculator,
    apply_closures,
)

from .representative import (
    STRATEGY_MIN_PREREQS,
    STRATEGY_AGGREGATED,
    assign_representatives,
)

from .serializer import (
    build_payload,
    write_payload,
    load_payload,
    generate_graph_report,
)

from .compile import (
    compile_graph,
    build_graph,
)

__all__ = [
    # Fields
    "slugify",
    "split_multi_field",
    "parse_hierarchy_field",
    # Ingestion
    "CATALOG_COLUMNS",
    "missing_columns",
    "parse_rows",
    "read_rows",
    # Resolution
    "BuildContext",
    "ResolvedCatalog",
    "resolve_entities",
    # Dependencies
    "PrerequisiteCycleError",
    "derive_module_prerequisites",
    "topological_order",
    # Closure
    "ClosureCalculator",
    "apply_closures",
    # Representatives
    "STRATEGY_MIN_PREREQS",
    "STRATEGY_AGGREGATED",
    "assign_representatives",
    # Serialization
    "build_payload",
    "write_payload",
    "load_payload",
    "generate_graph_report",
    # Compilation
    "compile_graph",
    "build_graph",
]
