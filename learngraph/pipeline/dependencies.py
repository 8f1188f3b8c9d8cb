"""
Dependency graph builder - module prerequisite sets and topological order.

An edge runs prerequisite -> dependent. Ordering uses Kahn's algorithm with a
FIFO queue seeded in module creation order, so the same catalog always gives
the same order.
"""

import logging
from collections import deque

import networkx as nx

from learngraph.schemas import ModuleNode, Resource

logger = logging.getLogger(__name__)


class PrerequisiteCycleError(ValueError):
    """Raised when module prerequisites contain a cycle."""

    def __init__(self, module_ids: list[str], cycle: list[tuple[str, str]]):
        self.module_ids = module_ids
        self.cycle = cycle
        message = (
            "Detected a cycle in module prerequisites. Please resolve circular dependencies. "
            f"Unordered modules: {', '.join(module_ids)}"
        )
        if cycle:
            path = [u for u, _ in cycle] + [cycle[-1][1]]
            message += f". Cycle: {' -> '.join(path)}"
        super().__init__(message)


def derive_module_prerequisites(
    modules: dict[str, ModuleNode],
    resources: list[Resource]
) -> None:
    """
    Widen each module's prerequisite set with its resources' prerequisites.

    Self references are dropped so a module never depends on itself.
    """
    by_id: dict[str, Resource] = {}
    for resource in resources:
        by_id.setdefault(resource.id, resource)

    edge_count = 0
    for module in modules.values():
        seen = set(module.prerequisite_module_ids)
        seen.discard(module.id)
        module.prerequisite_module_ids = [p for p in module.prerequisite_module_ids if p != module.id]
        for resource_id in module.resource_ids:
            resource = by_id.get(resource_id)
            if resource is None:
                continue
            for prereq_id in resource.prerequisite_module_ids:
                if prereq_id != module.id and prereq_id not in seen:
                    seen.add(prereq_id)
                    module.prerequisite_module_ids.append(prereq_id)
        edge_count += len(module.prerequisite_module_ids)

    logger.info(f"Derived {edge_count} module prerequisite edges")


def build_prerequisite_digraph(modules: dict[str, ModuleNode]) -> nx.DiGraph:
    """Directed graph with an edge prerequisite -> dependent for every module prerequisite."""
    G = nx.DiGraph()
    for module_id in modules:
        G.add_node(module_id)
    for module in modules.values():
        for prereq_id in module.prerequisite_module_ids:
            G.add_edge(prereq_id, module.id)
    return G


def _find_cycle(modules: dict[str, ModuleNode], remaining: list[str]) -> list[tuple[str, str]]:
    G = build_prerequisite_digraph(modules).subgraph(remaining)
    try:
        return [(u, v) for u, v in nx.find_cycle(G)]
    except nx.NetworkXNoCycle:
        return []


def topological_order(modules: dict[str, ModuleNode]) -> list[str]:
    """
    Order modules so every prerequisite precedes its dependents.

    Raises:
        PrerequisiteCycleError: If some modules can't be ordered
    """
    in_degree: dict[str, int] = {module_id: 0 for module_id in modules}
    dependents: dict[str, list[str]] = {module_id: [] for module_id in modules}

    for module in modules.values():
        for prereq_id in module.prerequisite_module_ids:
            in_degree[module.id] += 1
            if prereq_id in dependents:
                dependents[prereq_id].append(module.id)

    queue = deque(module_id for module_id, degree in in_degree.items() if degree == 0)
    order: list[str] = []
    while queue:
        current = queue.popleft()
        order.append(current)
        for dependent in dependents[current]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(order) != len(modules):
        ordered = set(order)
        remaining = [module_id for module_id in modules if module_id not in ordered]
        raise PrerequisiteCycleError(remaining, _find_cycle(modules, remaining))

    logger.info(f"Computed topological order over {len(order)} modules")
    return order
