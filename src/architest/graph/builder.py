"""Build the service dependency graph (nodes and edges, no layout)."""

from __future__ import annotations

from architest.models import GraphEdge, GraphNode, ScanResult, ServiceGraph


def build_service_graph(result: ScanResult) -> ServiceGraph:
    """One node per compose service, one edge per ``depends_on`` entry.

    Edges pointing at a name with no compose service are kept and flagged
    ``external``; no node is invented for them.  Repeated dependency entries
    collapse into one edge.
    """
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    seen_edges: set[tuple[str, str]] = set()

    for svc in result.services:
        spec = svc.openapi
        nodes.append(
            GraphNode(
                id=svc.name,
                image=svc.image,
                ports=tuple(p.container for p in svc.ports),
                has_spec=spec is not None,
                spec_title=spec.title if spec is not None else None,
                endpoint_count=len(spec.endpoints) if spec is not None else 0,
            )
        )
        for target in svc.depends_on:
            if (svc.name, target) in seen_edges:
                continue
            seen_edges.add((svc.name, target))
            external = result.service(target) is None
            edges.append(GraphEdge(source=svc.name, target=target, external=external))

    return ServiceGraph(nodes=tuple(nodes), edges=tuple(edges))
