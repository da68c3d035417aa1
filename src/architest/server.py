"""MCP server that maps Docker Compose services to their OpenAPI contracts."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from architest.tools.graph import service_graph
from architest.tools.health import health
from architest.tools.scan import scan_project

mcp = FastMCP(
    "architest",
    instructions=(
        "architest reads a project's Docker Compose file and its OpenAPI/Swagger "
        "spec files and reports which services exist, which ports they expose, "
        "how they depend on each other, and which API contract each service "
        "implements.\n\n"
        "### Tools\n"
        "- **scan_project** -- Start here. Returns every compose service with "
        "its ports, build context, depends_on list and, when one was matched, "
        "the attached OpenAPI spec (title, base URL, endpoints, response "
        "schemas). Specs that failed to parse are listed in specErrors.\n"
        "- **service_graph** -- The same scan reduced to a dependency graph "
        "(nodes and edges). Use it to explain call order or blast radius.\n"
        "- **health** -- Liveness check.\n\n"
        "### Key principles\n"
        "- All tools are read-only: nothing is written, no containers are "
        "started and no network requests are made.\n"
        "- A service without an attached spec is normal (databases, "
        "frontends). Do not report it as an error.\n"
        "- Matching is literal: by spec file location inside the build "
        "context, then by base URL port. Never guess a spec for a service."
    ),
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(scan_project)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(service_graph)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(health)
