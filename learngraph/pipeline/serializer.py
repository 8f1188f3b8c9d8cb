"""
Serializer - assemble the compiled graph payload and write it to disk.

The artifact is written to a temporary file next to the destination and
moved into place, so a failed run never leaves a partial graph.json behind.
"""

import json
import logging
import os
import stat
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from learngraph.schemas import (
    GraphPayload,
    ModuleNode,
    Resource,
    TagTreeNode,
    TagTreeNodeExport,
)

logger = logging.getLogger(__name__)


def export_tag_tree(node: TagTreeNode) -> TagTreeNodeExport:
    """Convert keyed children into ordered child lists, recursively."""
    return TagTreeNodeExport(
        id=node.id,
        name=node.name,
        full_path=node.full_path,
        children=[export_tag_tree(child) for child in node.children.values()],
    )


def build_payload(
    modules: dict[str, ModuleNode],
    resources: list[Resource],
    module_order: list[str],
    tag_tree: TagTreeNode,
    generated_at: str | None = None
) -> GraphPayload:
    """
    Assemble the compiled artifact.

    Args:
        modules: Modules in creation order
        resources: Resources in catalog row order
        module_order: Topological module order
        tag_tree: Root of the built tag tree
        generated_at: Timestamp override (defaults to now, UTC ISO-8601)
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return GraphPayload(
        generated_at=generated_at,
        modules=list(modules.values()),
        resources=list(resources),
        module_order=list(module_order),
        tag_tree=export_tag_tree(tag_tree),
    )


def payload_to_dict(payload: GraphPayload) -> dict:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def _artifact_mode(output_path: Path) -> int:
    """Mode for the artifact: keep an existing file's mode, else 0o666 minus umask."""
    if output_path.exists():
        return stat.S_IMODE(output_path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_payload(payload: GraphPayload, output_path: Path) -> Path:
    """Write the payload as JSON, replacing output_path atomically."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(payload_to_dict(payload), f, ensure_ascii=False, indent=2)
        os.chmod(tmp_name, _artifact_mode(output_path))
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Graph payload written to {output_path}")
    return output_path


def load_payload(path: Path) -> GraphPayload:
    """Read a compiled artifact back into a GraphPayload."""
    with open(path, 'r', encoding='utf-8') as f:
        return GraphPayload.model_validate(json.load(f))


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------

def generate_graph_report(payload: GraphPayload, output_path: Path) -> None:
    """Generate a human-readable Markdown summary of the compiled graph."""
    modules_by_id = {m.id: m for m in payload.modules}
    edge_count = sum(len(m.prerequisite_module_ids) for m in payload.modules)
    placeholders = [m for m in payload.modules if not m.resource_ids]

    lines = [
        "# Learning Graph Report",
        "",
        f"Generated: {payload.generated_at}",
        "",
        "## Summary",
        "",
        f"- **Modules**: {len(payload.modules)}",
        f"- **Resources**: {len(payload.resources)}",
        f"- **Prerequisite edges**: {edge_count}",
        f"- **Prerequisite-only modules**: {len(placeholders)}",
        f"- **Top-level tags**: {len(payload.tag_tree.children)}",
        "",
        "## Module Order",
        "",
        "| # | Module | Area | Resources | Prerequisites | Representative |",
        "|---|--------|------|-----------|---------------|----------------|",
    ]

    for index, module_id in enumerate(payload.module_order):
        module = modules_by_id.get(module_id)
        if module is None:
            continue
        prereqs = ", ".join(
            modules_by_id[p].name if p in modules_by_id else p
            for p in module.prerequisite_module_ids
        ) or "None"
        profile = module.representative_profiles.get("minPrereqs")
        representative = profile.label if profile else "-"
        lines.append(
            f"| {index + 1} | {module.name} | {module.area} | "
            f"{len(module.resource_ids)} | {prereqs} | {representative} |"
        )

    lines.append("")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines))
    logger.info(f"Saved graph report to {output_path}")
