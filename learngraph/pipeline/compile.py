"""
Graph compilation pipeline.

rows -> entities -> module prerequisites -> topological order -> closures
-> representatives -> payload. A prerequisite cycle aborts the run before
anything is written.
"""

import logging
from pathlib import Path

from learngraph.schemas import GraphPayload

from .closure import apply_closures
from .dependencies import derive_module_prerequisites, topological_order
from .ingest import read_rows
from .representative import assign_representatives
from .resolver import resolve_entities
from .serializer import build_payload, generate_graph_report, write_payload

logger = logging.getLogger(__name__)


def compile_graph(
    rows: list[dict[str, str]],
    generated_at: str | None = None
) -> GraphPayload:
    """
    Compile catalog rows into the graph payload.

    Raises:
        PrerequisiteCycleError: If module prerequisites form a cycle
    """
    # Step 1: Resolve entities and tag tree
    catalog = resolve_entities(rows)

    # Step 2: Module prerequisites and order
    derive_module_prerequisites(catalog.modules, catalog.resources)
    order = topological_order(catalog.modules)

    # Step 3: Closures
    apply_closures(catalog.modules, order)

    # Step 4: Representatives
    assign_representatives(catalog.modules, catalog.resources)

    return build_payload(
        catalog.modules,
        catalog.resources,
        order,
        catalog.tag_tree,
        generated_at=generated_at,
    )


def build_graph(
    input_path: Path,
    output_path: Path,
    report_path: Path | None = None,
    delimiter: str = ","
) -> GraphPayload:
    """
    Read the catalog, compile it and write the artifact (and optional report).

    Args:
        input_path: Catalog file with a header row
        output_path: Destination for graph.json
        report_path: Optional destination for a Markdown report
        delimiter: Field delimiter of the catalog file

    Returns:
        The written GraphPayload
    """
    rows = read_rows(input_path, delimiter=delimiter)
    payload = compile_graph(rows)
    write_payload(payload, output_path)
    if report_path is not None:
        generate_graph_report(payload, report_path)
    return payload
