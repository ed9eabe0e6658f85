"""
Directed graph utilities: stabilized topological sort and cycle detection
"""
import heapq
from typing import Dict, Iterable, List, Mapping, Set


class Unorderable(Exception):
    """
    Raised if the graph contains cycles and therefore has no topological order
    """

    def __init__(self, components: List[List[int]]):
        """Init the object

        Args:
            components (List[List[int]]): nodes of each cycle, in ascending order
        """
        super().__init__(f"graph contains cycle(s): {components}")
        self.components: List[List[int]] = components


def _build_successors(nodes: Iterable[int], edges: Mapping[int, Iterable[int]]) -> Dict[int, Set[int]]:
    successors: Dict[int, Set[int]] = {node: set() for node in nodes}
    for source, targets in edges.items():
        for target in targets:
            if source not in successors or target not in successors:
                raise KeyError(f"edge {source} -> {target} references an unknown node")
            successors[source].add(target)
    return successors


def sort_stabilized(nodes: Iterable[int], edges: Mapping[int, Iterable[int]]) -> List[int]:
    """Sort the nodes so that every edge source comes before its target (Kahn's algorithm).

    When several nodes are ready, the smallest one is picked first: the result is the
    topological order closest to the ascending order of the nodes, and does not depend on
    the iteration order of edges.

    Args:
        nodes (Iterable[int]): nodes
        edges (Mapping[int, Iterable[int]]): node -> nodes that must come after it

    Raises:
        Unorderable: if the graph contains a cycle

    Returns:
        List[int]: sorted nodes
    """
    successors = _build_successors(nodes, edges)

    in_degree = {node: 0 for node in successors}
    for targets in successors.values():
        for target in targets:
            in_degree[target] += 1

    queue = [node for node, degree in in_degree.items() if degree == 0]
    heapq.heapify(queue)

    result: List[int] = []
    while queue:
        current = heapq.heappop(queue)
        result.append(current)
        for target in successors[current]:
            in_degree[target] -= 1
            if in_degree[target] == 0:
                heapq.heappush(queue, target)

    if len(result) != len(successors):
        raise Unorderable(cycles(successors))

    return result


def strongly_connected_components(successors: Mapping[int, Iterable[int]]) -> List[List[int]]:
    """Return the strongly connected components of the graph (iterative Tarjan's algorithm)

    Args:
        successors (Mapping[int, Iterable[int]]): node -> successors. Every node must be a key

    Returns:
        List[List[int]]: components, each in ascending order, ordered by their smallest node
    """
    index_of: Dict[int, int] = {}
    low_link: Dict[int, int] = {}
    on_stack: Set[int] = set()
    stack: List[int] = []
    components: List[List[int]] = []
    counter = 0

    for root in sorted(successors):
        if root in index_of:
            continue

        # (node, remaining successors)
        work = [(root, iter(sorted(successors[root])))]
        index_of[root] = low_link[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)

        while work:
            node, remaining = work[-1]
            advanced = False
            for target in remaining:
                if target not in index_of:
                    index_of[target] = low_link[target] = counter
                    counter += 1
                    stack.append(target)
                    on_stack.add(target)
                    work.append((target, iter(sorted(successors[target]))))
                    advanced = True
                    break
                if target in on_stack:
                    low_link[node] = min(low_link[node], index_of[target])
            if advanced:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                low_link[parent] = min(low_link[parent], low_link[node])

            if low_link[node] == index_of[node]:
                component: List[int] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(sorted(component))

    return sorted(components, key=lambda component: component[0])


def cycles(successors: Mapping[int, Iterable[int]]) -> List[List[int]]:
    """Return the cycles of the graph: the strongly connected components with more than one
    node, and the nodes with an edge to themselves

    Args:
        successors (Mapping[int, Iterable[int]]): node -> successors. Every node must be a key

    Returns:
        List[List[int]]: cycles, each in ascending order, ordered by their smallest node
    """
    return [
        component
        for component in strongly_connected_components(successors)
        if len(component) > 1 or component[0] in successors[component[0]]
    ]
