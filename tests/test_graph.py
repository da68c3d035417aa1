"""Tests for the service dependency graph builder."""

from __future__ import annotations

from pathlib import Path

from architest.graph.builder import build_service_graph
from architest.models import (
    DockerComposeResult,
    DockerService,
    EnrichedService,
    GraphEdge,
    OpenAPIEndpoint,
    OpenAPIResult,
    PortMapping,
    ScanResult,
)
from architest.scanner.orchestrator import scan

SAMPLE_PROJECT = Path(__file__).parent / "fixtures" / "sample_project"


def _result(*services: EnrichedService) -> ScanResult:
    compose = DockerComposeResult(
        file_path="/p/docker-compose.yml", services=tuple(s.service for s in services)
    )
    return ScanResult(project_path="/p", compose=compose, services=services)


class TestBuildServiceGraph:
    def test_one_node_per_service(self):
        graph = build_service_graph(scan(SAMPLE_PROJECT))
        assert [n.id for n in graph.nodes] == ["user-api", "order-api", "frontend", "postgres"]

    def test_node_spec_details(self):
        graph = build_service_graph(scan(SAMPLE_PROJECT))
        nodes = {n.id: n for n in graph.nodes}

        assert nodes["user-api"].has_spec is True
        assert nodes["user-api"].spec_title == "User API"
        assert nodes["user-api"].endpoint_count == 3
        assert nodes["user-api"].ports == (8080,)

        assert nodes["postgres"].has_spec is False
        assert nodes["postgres"].spec_title is None
        assert nodes["postgres"].image == "postgres:16"

    def test_edges_follow_depends_on(self):
        graph = build_service_graph(scan(SAMPLE_PROJECT))
        assert [(e.source, e.target) for e in graph.edges] == [
            ("user-api", "postgres"),
            ("order-api", "postgres"),
            ("order-api", "user-api"),
            ("frontend", "user-api"),
            ("frontend", "order-api"),
        ]
        assert not any(e.external for e in graph.edges)

    def test_unknown_dependency_is_external_edge(self):
        api = EnrichedService(service=DockerService(name="api", depends_on=("ghost",)))
        graph = build_service_graph(_result(api))
        assert [n.id for n in graph.nodes] == ["api"]
        assert graph.edges == (GraphEdge(source="api", target="ghost", external=True),)

    def test_duplicate_dependencies_collapse(self):
        api = EnrichedService(service=DockerService(name="api", depends_on=("db", "db")))
        db = EnrichedService(service=DockerService(name="db"))
        graph = build_service_graph(_result(api, db))
        assert graph.edges == (GraphEdge(source="api", target="db"),)

    def test_node_ports_are_container_ports(self):
        service = DockerService(name="web", ports=(PortMapping(host=8080, container=80),))
        spec = OpenAPIResult(
            file_path="/p/openapi.yml",
            title="Web",
            version="1",
            endpoints=(OpenAPIEndpoint(method="GET", path="/"),),
        )
        graph = build_service_graph(_result(EnrichedService(service=service, openapi=spec)))
        node = graph.nodes[0]
        assert node.ports == (80,)
        assert node.endpoint_count == 1

    def test_to_dict(self):
        graph = build_service_graph(scan(SAMPLE_PROJECT))
        data = graph.to_dict()
        assert set(data) == {"nodes", "edges"}
        assert data["nodes"][0]["hasSpec"] is True
        assert data["edges"][0] == {"source": "user-api", "target": "postgres", "external": False}
