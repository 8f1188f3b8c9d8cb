"""
Entity resolver - build modules, resources and the tag tree from catalog rows.

Modules are keyed by (area, name). A prerequisite module name is resolved to
an area by taking the first catalog row whose Module column matches it
(falling back to the referencing row's own area), and modules that are only
ever mentioned as prerequisites are created empty.
"""

import logging
from dataclasses import dataclass, field

from learngraph.schemas import (
    Difficulty,
    DIFFICULTY_WEIGHTS,
    ModuleNode,
    Resource,
    TagTreeNode,
)

from .fields import (
    join_path,
    parse_hierarchy_field,
    path_prefixes,
    slugify,
    split_multi_field,
)
from .ingest import (
    COL_AREA,
    COL_DIFFICULTY,
    COL_LINK,
    COL_MODULE,
    COL_PREREQUISITES,
    COL_RESOURCE_NAME,
    COL_TAG_PREREQUISITES,
    COL_TAGS,
    COL_TYPE,
)

logger = logging.getLogger(__name__)


def module_key(area: str, name: str) -> str:
    return f"{area.strip()}::{name.strip()}"


def module_id_for(area: str, name: str) -> str:
    return slugify(module_key(area, name))


def resource_id_for(resource_name: str, module_name: str) -> str:
    return slugify(f"{resource_name}-{module_name}")


def parse_difficulty(value: str) -> Difficulty:
    """Map a Difficulty cell to the enum; unknown values fall back to Beginner."""
    text = (value or "").strip()
    for level in Difficulty:
        if level.value.lower() == text.lower():
            return level
    logger.warning(f"Unknown difficulty {value!r}, treating as {Difficulty.BEGINNER.value}")
    return Difficulty.BEGINNER


def add_tag_path(root: TagTreeNode, segments: list[str]) -> None:
    """Insert a tag path into the tree, sharing any existing prefix chain."""
    current = root
    for index, segment in enumerate(segments):
        child = current.children.get(segment)
        if child is None:
            full_path = join_path(segments[:index + 1])
            child = TagTreeNode(id=slugify(full_path), name=segment, full_path=full_path)
            current.children[segment] = child
        current = child


# -----------------------------------------------------------------------------
# Build context
# -----------------------------------------------------------------------------

@dataclass
class BuildContext:
    """Mutable state accumulated while rows are ingested."""
    rows: list[dict[str, str]]
    modules: dict[str, ModuleNode] = field(default_factory=dict)
    resources: list[Resource] = field(default_factory=list)
    tag_root: TagTreeNode = field(default_factory=TagTreeNode.root)
    _module_areas: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # First row per module name wins
        for row in self.rows:
            name = _cell(row, COL_MODULE)
            if name not in self._module_areas:
                self._module_areas[name] = row.get(COL_AREA) or ""

    def find_module_area(self, module_name: str, default_area: str) -> str:
        return self._module_areas.get(module_name.strip(), default_area)

    def ensure_module(self, area: str, name: str) -> ModuleNode:
        module_id = module_id_for(area, name)
        module = self.modules.get(module_id)
        if module is None:
            module = ModuleNode(id=module_id, name=name.strip(), area=area.strip())
            self.modules[module_id] = module
        return module


@dataclass
class ResolvedCatalog:
    modules: dict[str, ModuleNode]
    resources: list[Resource]
    tag_tree: TagTreeNode


def _cell(row: dict[str, str], column: str) -> str:
    return (row.get(column) or "").strip()


def _append_unique(items: list[str], seen: set[str], value: str) -> None:
    if value not in seen:
        seen.add(value)
        items.append(value)


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------

def _resolve_prerequisites(ctx: BuildContext, row: dict[str, str]) -> list[str]:
    """Resolve a row's prerequisite module names to module ids, creating placeholders."""
    row_area = row.get(COL_AREA) or ""
    ids: list[str] = []
    seen: set[str] = set()
    for name in split_multi_field(row.get(COL_PREREQUISITES)):
        area = ctx.find_module_area(name, row_area)
        if module_id_for(area, name) not in ctx.modules:
            logger.debug(f"Creating placeholder module for prerequisite {name!r} in area {area.strip()!r}")
        module = ctx.ensure_module(area, name)
        _append_unique(ids, seen, module.id)
    return ids


def _ingest_row(ctx: BuildContext, row: dict[str, str]) -> Resource:
    area = _cell(row, COL_AREA)
    module_name = _cell(row, COL_MODULE)
    resource_name = _cell(row, COL_RESOURCE_NAME)
    module = ctx.ensure_module(area, module_name)

    tag_paths = parse_hierarchy_field(row.get(COL_TAGS))
    flat_tags: list[str] = []
    seen_tags: set[str] = set()
    module_tags = set(module.flat_tags)
    for segments in tag_paths:
        add_tag_path(ctx.tag_root, segments)
        for prefix in path_prefixes(segments):
            _append_unique(flat_tags, seen_tags, prefix)
            _append_unique(module.flat_tags, module_tags, prefix)
        module.tag_paths.append(segments)

    tag_prerequisite_paths = parse_hierarchy_field(row.get(COL_TAG_PREREQUISITES))
    for segments in tag_prerequisite_paths:
        add_tag_path(ctx.tag_root, segments)

    prerequisite_ids = _resolve_prerequisites(ctx, row)

    difficulty = parse_difficulty(row.get(COL_DIFFICULTY, ""))
    resource = Resource(
        id=resource_id_for(resource_name, module_name),
        name=resource_name,
        link=_cell(row, COL_LINK),
        area=area,
        module_id=module.id,
        module_name=module_name,
        type=_cell(row, COL_TYPE),
        difficulty=difficulty,
        difficulty_weight=DIFFICULTY_WEIGHTS[difficulty],
        tag_paths=tag_paths,
        flat_tags=flat_tags,
        prerequisite_module_ids=prerequisite_ids,
        tag_prerequisite_paths=tag_prerequisite_paths,
    )
    ctx.resources.append(resource)
    module.resource_ids.append(resource.id)
    return resource


def resolve_entities(rows: list[dict[str, str]]) -> ResolvedCatalog:
    """
    Build Module and Resource entities plus the shared tag tree.

    Args:
        rows: Catalog rows from ingestion, in input order

    Returns:
        ResolvedCatalog with modules in creation order and resources in row order
    """
    logger.info("Resolving catalog entities...")
    ctx = BuildContext(rows=rows)
    for row in rows:
        _ingest_row(ctx, row)

    placeholders = sum(1 for m in ctx.modules.values() if not m.resource_ids)
    logger.info(
        f"Resolved {len(ctx.modules)} modules ({placeholders} prerequisite-only) "
        f"and {len(ctx.resources)} resources"
    )
    return ResolvedCatalog(modules=ctx.modules, resources=ctx.resources, tag_tree=ctx.tag_root)
