"""
Graph artifact schemas.

Defines the tag tree (build-time and exported shapes) and the compiled
payload written to disk and read back by the graph view.
"""

from .catalog import CamelModel, ModuleNode, Resource


# -----------------------------------------------------------------------------
# Tag tree
# -----------------------------------------------------------------------------

class TagTreeNode(CamelModel):
    """Build-time tag tree node; children keyed by segment, insertion ordered."""
    id: str
    name: str
    full_path: str
    children: dict[str, "TagTreeNode"] = {}

    @classmethod
    def root(cls) -> "TagTreeNode":
        return cls(id="root", name="root", full_path="")


class TagTreeNodeExport(CamelModel):
    """Exported tag tree node with ordered children."""
    id: str
    name: str
    full_path: str
    children: list["TagTreeNodeExport"] = []

    def iter_paths(self):
        """Yield the full path of every non-root node, depth first."""
        for child in self.children:
            yield child.full_path
            yield from child.iter_paths()


# -----------------------------------------------------------------------------
# Compiled payload
# -----------------------------------------------------------------------------

class GraphPayload(CamelModel):
    generated_at: str
    modules: list[ModuleNode]
    resources: list[Resource]
    module_order: list[str]
    tag_tree: TagTreeNodeExport
