"""
Closure calculator - transitive prerequisite sets per module.

closure(m) is, for each direct prerequisite p of m in order, p followed by
closure(p), keeping the first occurrence of each id. Results are memoized so
a module shared by many dependents is expanded once. The prerequisite graph
must already be known to be acyclic.
"""

import logging

from learngraph.schemas import ModuleNode

logger = logging.getLogger(__name__)


class ClosureCalculator:
    """Memoized transitive closure over module prerequisites."""

    def __init__(self, modules: dict[str, ModuleNode]):
        self.modules = modules
        self._memo: dict[str, list[str]] = {}

    def closure(self, module_id: str) -> list[str]:
        """Return every module reachable through prerequisites (a copy)."""
        if module_id not in self._memo:
            self._expand(module_id)
        return list(self._memo[module_id])

    def _merge(self, module_id: str) -> list[str]:
        module = self.modules.get(module_id)
        if module is None:
            return []
        result: list[str] = []
        seen: set[str] = set()
        for prereq_id in module.prerequisite_module_ids:
            for item in [prereq_id, *self._memo.get(prereq_id, [])]:
                if item not in seen:
                    seen.add(item)
                    result.append(item)
        return result

    def _expand(self, module_id: str) -> None:
        # Post-order walk with an explicit stack
        stack = [(module_id, False)]
        while stack:
            current, children_done = stack.pop()
            if current in self._memo:
                continue
            if children_done:
                self._memo[current] = self._merge(current)
                continue
            stack.append((current, True))
            module = self.modules.get(current)
            if module is None:
                continue
            for prereq_id in reversed(module.prerequisite_module_ids):
                if prereq_id not in self._memo:
                    stack.append((prereq_id, False))


def apply_closures(modules: dict[str, ModuleNode], order: list[str]) -> ClosureCalculator:
    """
    Fill closure_prerequisites and closure_order on every module.

    closure_order is the module's index in the topological order.
    """
    calculator = ClosureCalculator(modules)
    position = {module_id: index for index, module_id in enumerate(order)}
    for module in modules.values():
        module.closure_prerequisites = calculator.closure(module.id)
        module.closure_order = position.get(module.id, -1)

    deepest = max((len(m.closure_prerequisites) for m in modules.values()), default=0)
    logger.info(f"Computed closures for {len(modules)} modules (largest closure: {deepest})")
    return calculator
