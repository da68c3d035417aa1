"""scan_project tool -- map compose services to the OpenAPI specs they implement."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from architest.errors import ArchitestError
from architest.models import ScanResult
from architest.tools._helpers import error_payload, run_scan


async def scan_project(
    ctx: Context,
    path: str = ".",
) -> dict[str, object]:
    """Scan a project's Docker Compose file and OpenAPI/Swagger specs.

    Parses docker-compose.yml (or docker-compose.yaml, compose.yml,
    compose.yaml), discovers spec files at conventional locations
    (openapi.*, swagger.*, docs/, api/ and inside each service's build
    context), and attaches at most one spec to each service: first by
    build-context co-location, then by matching the spec's base URL port to
    a container port.

    Spec files that fail to parse do not fail the scan; they are listed in
    ``specErrors``.

    Args:
        path: Path to the project directory. Defaults to current directory (".").

    Returns:
        Dict with: projectPath, compose, discoveredSpecs, services (each with
        an optional ``openapi`` entry), specErrors and a human-readable
        summary. On a fatal compose error: success=False, error, kind.
    """
    try:
        result = await run_scan(path)
        output = result.to_dict()
        output["summary"] = _build_summary(result)
        return output

    except ArchitestError as exc:
        return error_payload(exc)
    except Exception as exc:
        await ctx.error(f"Unexpected error in scan_project: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}


def _build_summary(result: ScanResult) -> str:
    """Build a human-readable summary string for LLM consumption."""
    attached = [svc for svc in result.services if svc.openapi is not None]
    parts: list[str] = [
        f"Scanned {result.project_path}.",
        f"Found {len(result.services)} services in {result.compose.file_path}.",
        f"Discovered {len(result.discovered_specs)} spec files.",
    ]

    if attached:
        pairs = ", ".join(f"{svc.name} -> {svc.openapi.title}" for svc in attached)
        parts.append(f"{len(attached)} services matched to a spec: {pairs}.")
    else:
        parts.append("No service was matched to a spec.")

    if result.spec_errors:
        parts.append(f"{len(result.spec_errors)} spec files could not be parsed (see specErrors).")

    return " ".join(parts)
