"""SCC computation and dependency-first ordering for the target graph."""

from collections.abc import Iterable


def compute_sccs(graph: dict[str, list[str]]) -> list[list[str]]:
    """
    Compute strongly connected components using Tarjan's algorithm.

    Args:
        graph: Adjacency list (target -> list of targets it depends on)

    Returns:
        List of SCCs, each a list of target names. SCCs come out in
        reverse topological order, so dependencies precede dependents.
    """
    counter = [0]
    stack: list[str] = []
    lowlinks: dict[str, int] = {}
    index: dict[str, int] = {}
    on_stack: set[str] = set()
    sccs: list[list[str]] = []

    # Targets that only appear as dependencies still need a component
    all_nodes: list[str] = list(graph.keys())
    seen = set(all_nodes)
    for deps in graph.values():
        for dep in deps:
            if dep not in seen:
                seen.add(dep)
                all_nodes.append(dep)

    def strongconnect(node: str) -> None:
        index[node] = counter[0]
        lowlinks[node] = counter[0]
        counter[0] += 1
        stack.append(node)
        on_stack.add(node)

        for dep in graph.get(node, []):
            if dep not in index:
                strongconnect(dep)
                lowlinks[node] = min(lowlinks[node], lowlinks[dep])
            elif dep in on_stack:
                lowlinks[node] = min(lowlinks[node], index[dep])

        if lowlinks[node] == index[node]:
            scc = []
            while True:
                w = stack.pop()
                on_stack.remove(w)
                scc.append(w)
                if w == node:
                    break
            sccs.append(scc)

    for node in all_nodes:
        if node not in index:
            strongconnect(node)

    return sccs


def reachable(graph: dict[str, list[str]], roots: Iterable[str]) -> set[str]:
    """Return every target reachable from ``roots``, roots included."""
    found: set[str] = set()
    pending = list(roots)
    while pending:
        node = pending.pop()
        if node in found:
            continue
        found.add(node)
        pending.extend(graph.get(node, []))
    return found


def build_order(graph: dict[str, list[str]], roots: Iterable[str] | None = None) -> list[str]:
    """
    Order targets so that every target comes after its dependencies.

    Args:
        graph: Adjacency list (target -> dependencies)
        roots: Restrict the order to what these targets need. Defaults to
            the whole graph.

    Raises:
        ValueError: If the graph contains a cycle.
    """
    if roots is not None:
        keep = reachable(graph, roots)
        graph = {n: [d for d in graph.get(n, []) if d in keep] for n in sorted(keep)}

    order: list[str] = []
    for scc in compute_sccs(graph):
        if len(scc) > 1 or scc[0] in graph.get(scc[0], []):
            raise ValueError(f"Dependency cycle between: {', '.join(sorted(scc))}")
        order.append(scc[0])
    return order
