"""Domain models for architest. All frozen dataclasses -- no mutation after creation.

``to_dict`` methods produce the JSON wire shape (camelCase keys, unset
optional fields omitted) returned by the tools.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from architest.errors import ErrorKind

# ─── Docker Compose Models ────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PortMapping:
    """One exposed port. ``protocol`` is only set when written in the source."""

    host: int
    container: int
    protocol: str | None = None

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"host": self.host, "container": self.container}
        if self.protocol is not None:
            result["protocol"] = self.protocol
        return result


@dataclass(frozen=True, slots=True)
class DockerService:
    """A service entry from a compose file.

    ``build`` is the build-context path, not the raw YAML build block.
    ``depends_on`` names are passed through without checking that they exist.
    """

    name: str
    image: str | None = None
    build: str | None = None
    ports: tuple[PortMapping, ...] = ()
    depends_on: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"name": self.name}
        if self.image is not None:
            result["image"] = self.image
        if self.build is not None:
            result["build"] = self.build
        result["ports"] = [p.to_dict() for p in self.ports]
        result["dependsOn"] = list(self.depends_on)
        return result


@dataclass(frozen=True, slots=True)
class DockerComposeResult:
    file_path: str
    version: str | None = None
    services: tuple[DockerService, ...] = ()

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"filePath": self.file_path}
        if self.version is not None:
            result["version"] = self.version
        result["services"] = [s.to_dict() for s in self.services]
        return result


# ─── OpenAPI Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OpenAPIResponse:
    status_code: str
    description: str | None = None
    schema: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"statusCode": self.status_code}
        if self.description is not None:
            result["description"] = self.description
        if self.schema is not None:
            result["schema"] = self.schema
        return result


@dataclass(frozen=True, slots=True)
class OpenAPIEndpoint:
    """One operation. ``method`` is upper case, ``path`` is as written in the spec."""

    method: str
    path: str
    summary: str | None = None
    operation_id: str | None = None
    responses: tuple[OpenAPIResponse, ...] = ()

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"method": self.method, "path": self.path}
        if self.summary is not None:
            result["summary"] = self.summary
        if self.operation_id is not None:
            result["operationId"] = self.operation_id
        result["responses"] = [r.to_dict() for r in self.responses]
        return result


@dataclass(frozen=True, slots=True)
class OpenAPIResult:
    file_path: str
    title: str
    version: str
    base_url: str | None = None
    endpoints: tuple[OpenAPIEndpoint, ...] = ()

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {
            "filePath": self.file_path,
            "title": self.title,
            "version": self.version,
        }
        if self.base_url is not None:
            result["baseUrl"] = self.base_url
        result["endpoints"] = [e.to_dict() for e in self.endpoints]
        return result


# ─── Scan Models ──────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class EnrichedService:
    """A compose service plus the single OpenAPI spec attached to it, if any."""

    service: DockerService
    openapi: OpenAPIResult | None = None

    @property
    def name(self) -> str:
        return self.service.name

    @property
    def image(self) -> str | None:
        return self.service.image

    @property
    def build(self) -> str | None:
        return self.service.build

    @property
    def ports(self) -> tuple[PortMapping, ...]:
        return self.service.ports

    @property
    def depends_on(self) -> tuple[str, ...]:
        return self.service.depends_on

    def to_dict(self) -> dict[str, object]:
        result = self.service.to_dict()
        if self.openapi is not None:
            result["openapi"] = self.openapi.to_dict()
        return result


@dataclass(frozen=True, slots=True)
class SpecError:
    """A discovered spec file that could not be parsed."""

    file_path: str
    kind: ErrorKind
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"filePath": self.file_path, "kind": self.kind.value, "error": self.message}


@dataclass(frozen=True, slots=True)
class ScanResult:
    project_path: str
    compose: DockerComposeResult
    discovered_specs: tuple[str, ...] = ()
    services: tuple[EnrichedService, ...] = ()
    spec_errors: tuple[SpecError, ...] = ()

    def service(self, name: str) -> EnrichedService | None:
        """Look up an enriched service by name."""
        for svc in self.services:
            if svc.name == name:
                return svc
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "projectPath": self.project_path,
            "compose": self.compose.to_dict(),
            "discoveredSpecs": list(self.discovered_specs),
            "services": [s.to_dict() for s in self.services],
            "specErrors": [e.to_dict() for e in self.spec_errors],
        }


# ─── Graph Models ─────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GraphNode:
    id: str
    image: str | None = None
    ports: tuple[int, ...] = ()
    has_spec: bool = False
    spec_title: str | None = None
    endpoint_count: int = 0

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"id": self.id}
        if self.image is not None:
            result["image"] = self.image
        result["ports"] = list(self.ports)
        result["hasSpec"] = self.has_spec
        if self.spec_title is not None:
            result["specTitle"] = self.spec_title
        result["endpointCount"] = self.endpoint_count
        return result


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """A ``depends_on`` edge. ``external`` marks a target with no compose service."""

    source: str
    target: str
    external: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"source": self.source, "target": self.target, "external": self.external}


@dataclass(frozen=True, slots=True)
class ServiceGraph:
    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
