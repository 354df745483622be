from __future__ import annotations

"""
Strongly-Connected Component Contraction.

Import cycles are collapsed into single units so that ownership relaxation
always runs over a directed acyclic graph.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from nestify.domain.graph_models import ProjectGraph


@dataclass
class Condensation:
    """
    Component DAG of a project graph.

    Attributes:
        members: Node indices of each component, ascending.
        component_of: Component index of each node.
        representative: Node naming each component (smallest original path).
        dependencies: Component-level dependency sets, self-loops removed.
        dependents: Inverse of dependencies.
    """
    members: List[List[int]] = field(default_factory=list)
    component_of: List[int] = field(default_factory=list)
    representative: List[int] = field(default_factory=list)
    dependencies: List[Set[int]] = field(default_factory=list)
    dependents: List[Set[int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def find_components(adjacency: Sequence[Set[int]]) -> List[List[int]]:
    """
    Compute strongly-connected components with an iterative Tarjan walk.

    Args:
        adjacency: Successor sets indexed by vertex.

    Returns:
        List[List[int]]: Components (sorted member lists) ordered by their
                         smallest member.
    """
    count = len(adjacency)
    order: List[Optional[int]] = [None] * count
    low = [0] * count
    on_stack = [False] * count
    stack: List[int] = []
    components: List[List[int]] = []
    counter = 0

    for start in range(count):
        if order[start] is not None:
            continue

        order[start] = low[start] = counter
        counter += 1
        stack.append(start)
        on_stack[start] = True
        work: List[Tuple[int, Iterator[int]]] = [(start, iter(sorted(adjacency[start])))]

        while work:
            vertex, successors = work[-1]
            for succ in successors:
                if order[succ] is None:
                    order[succ] = low[succ] = counter
                    counter += 1
                    stack.append(succ)
                    on_stack[succ] = True
                    work.append((succ, iter(sorted(adjacency[succ]))))
                    break
                if on_stack[succ]:
                    low[vertex] = min(low[vertex], order[succ])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[vertex])
                if low[vertex] == order[vertex]:
                    component: List[int] = []
                    while True:
                        member = stack.pop()
                        on_stack[member] = False
                        component.append(member)
                        if member == vertex:
                            break
                    components.append(sorted(component))

    components.sort(key=lambda c: c[0])
    return components


def contract(graph: ProjectGraph) -> Condensation:
    """Collapse the import cycles of a graph into a component DAG."""
    components = find_components([n.dependencies for n in graph.nodes])
    result = Condensation(members=components, component_of=[0] * len(graph.nodes))

    for comp, members in enumerate(components):
        for index in members:
            result.component_of[index] = comp
        result.representative.append(
            min(members, key=lambda i: graph.nodes[i].original_path)
        )
        result.dependencies.append(set())
        result.dependents.append(set())

    for edge in graph.edges:
        head = result.component_of[edge.dependency]
        tail = result.component_of[edge.dependent]
        if head != tail:
            result.dependencies[tail].add(head)
            result.dependents[head].add(tail)

    return result
