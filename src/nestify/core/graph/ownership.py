from __future__ import annotations

"""
Ownership (Dominance) Resolver.

Assigns every file a placement owner: the nearest node common to all chains
of dependents leading to it from the entry points. Works on the component DAG
so that import cycles cannot make the relaxation loop forever.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from nestify.core.graph.components import Condensation, contract
from nestify.domain.constants import MIN_VISIT_BUDGET
from nestify.domain.errors import RelaxationBudgetExceeded, StructuralInvariantViolation
from nestify.domain.graph_models import ProjectGraph

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_ownership(graph: ProjectGraph, *, max_visits: int = 0) -> None:
    """
    Compute owner and depth for every node of the graph in place.

    Each entry component (no dependents outside itself) is walked from the
    virtual super-root. A revisited unit takes the nearest common owner of
    its current owner and the new candidate; whenever that makes it
    shallower, its dependencies are relaxed again.

    Args:
        graph: Graph produced by build_project_graph.
        max_visits: Upper bound on processed (unit, candidate) pairs;
                    0 selects the bound from default_visit_budget.

    Raises:
        RelaxationBudgetExceeded: The budget was exhausted.
        StructuralInvariantViolation: An entry point was walked twice or
                                      the owner relation contains a cycle.
    """
    dag = contract(graph)
    budget = max_visits or default_visit_budget(dag)

    owner: List[Optional[int]] = [None] * len(dag)
    depth: List[Optional[int]] = [None] * len(dag)
    children = [sorted(deps) for deps in dag.dependencies]
    entries = [c for c in range(len(dag)) if not dag.dependents[c]]
    visits = 0

    for entry in entries:
        if depth[entry] is not None:
            raise StructuralInvariantViolation(
                _path_of(graph, dag, entry), "entry point visited twice"
            )

        stack: List[Tuple[int, Optional[int]]] = [(entry, None)]
        while stack:
            unit, candidate = stack.pop()
            visits += 1
            if visits > budget:
                raise RelaxationBudgetExceeded(
                    _path_of(graph, dag, unit), f"relaxation exceeded {budget} visits"
                )

            current = depth[unit]
            if current is None:
                owner[unit] = candidate
                depth[unit] = 0 if candidate is None else _depth_of(depth, candidate) + 1
            else:
                if candidate is None:
                    raise StructuralInvariantViolation(
                        _path_of(graph, dag, unit), "entry point visited twice"
                    )
                common = nearest_common_owner(owner[unit], candidate, owner, depth)
                new_depth = 0 if common is None else _depth_of(depth, common) + 1
                if new_depth >= current:
                    continue
                owner[unit] = common
                depth[unit] = new_depth

            stack.extend((child, unit) for child in reversed(children[unit]))

    _expand(graph, dag, owner, depth)
    _check_forest(graph)

    logger.debug(
        f"Ownership resolved: {len(graph.nodes)} files in {len(dag)} units, "
        f"{len(entries)} entry points, {visits} visits."
    )


def nearest_common_owner(
        a: Optional[int],
        b: Optional[int],
        owner: Sequence[Optional[int]],
        depth: Sequence[Optional[int]],
) -> Optional[int]:
    """
    Climb two owner chains until they meet.

    The deeper chain steps first; equal depths step together. Reaching the
    root on either side means there is no shared owner.

    Returns:
        Optional[int]: The common owner, or None for the project root.
    """
    steps = 0
    limit = 2 * len(owner) + 2
    while True:
        if a is None or b is None:
            return None
        if a == b:
            return a

        steps += 1
        if steps > limit:
            raise StructuralInvariantViolation(str(a), "ownership cycle while climbing owners")

        depth_a = _depth_of(depth, a)
        depth_b = _depth_of(depth, b)
        if depth_a > depth_b:
            a = owner[a]
        elif depth_b > depth_a:
            b = owner[b]
        else:
            a = owner[a]
            b = owner[b]


def default_visit_budget(dag: Condensation) -> int:
    """
    Upper bound on the visits of a correct relaxation over a component DAG.

    A unit's depth starts below the unit count and only decreases, so it is
    set at most len(dag) times, and each setting pushes every outgoing edge
    once. Entry visits add at most len(dag) more.

    Returns:
        int: (units + 1) * (edges + 1), never below MIN_VISIT_BUDGET.
    """
    edge_count = sum(len(deps) for deps in dag.dependencies)
    return max(MIN_VISIT_BUDGET, (len(dag) + 1) * (edge_count + 1))


def reset_ownership(graph: ProjectGraph) -> None:
    """Return every node to the unvisited state and clear the mapping."""
    for node in graph.nodes:
        node.owner = None
        node.depth = None
    graph.updated_paths.clear()


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _depth_of(depth: Sequence[Optional[int]], unit: int) -> int:
    value = depth[unit]
    if value is None:
        raise StructuralInvariantViolation(str(unit), "owner has not been visited")
    return value


def _path_of(graph: ProjectGraph, dag: Condensation, unit: int) -> str:
    return graph.nodes[dag.representative[unit]].original_path


def _expand(
        graph: ProjectGraph,
        dag: Condensation,
        owner: Sequence[Optional[int]],
        depth: Sequence[Optional[int]],
) -> None:
    """Copy unit placement onto every member node."""
    for unit, members in enumerate(dag.members):
        owner_unit = owner[unit]
        owner_node = None if owner_unit is None else dag.representative[owner_unit]
        for index in members:
            node = graph.nodes[index]
            node.owner = owner_node
            node.depth = depth[unit]


def _check_forest(graph: ProjectGraph) -> None:
    """Verify the owner relation has no cycles."""
    limit = len(graph.nodes)
    for node in graph.nodes:
        current = node.owner
        steps = 0
        while current is not None:
            steps += 1
            if steps > limit:
                raise StructuralInvariantViolation(node.original_path, "ownership cycle")
            current = graph.nodes[current].owner
